"""
The Game class will be the entrypoint into the domain layer for the service layer.
It keeps the history of resolved turns and implements the two-phase protocol of a simultaneous turn:

1. collect: both players submit (and may replace/withdraw) their move for the pending turn
2. commit: as soon as both moves are in, they get resolved against each other in one go and a new Outcome is appended.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Optional

from loguru import logger

from simulchess.chess.board import GameState
from simulchess.chess.legality import (
    legal_moves_for_piece,
    legal_moves_for_player,
    player_status,
)
from simulchess.chess.moves import Move, MoveHistory
from simulchess.chess.pieces import Piece, Player
from simulchess.chess.resolution import resolve_moves
from simulchess.chess.rules import Rules
from simulchess.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    UnknownPlayerError,
)
from simulchess.core.shared_types import TERMINAL_STATUSES, Color, Status


@dataclass(frozen=True)
class GameStatus:
    """Status of every player after a turn"""

    players: Mapping[Player, Status]

    def of(self, player: Player) -> Status:
        return self.players[player]

    @property
    def is_over(self) -> bool:
        return any(status in TERMINAL_STATUSES for status in self.players.values())

    @property
    def winner(self) -> Optional[Player]:
        """
        Only a single checkmated/resigned player hands the win to the opponent.
        Stalemate, or both players going down in the same turn, has no winner.
        """
        losers = [
            player
            for player, status in self.players.items()
            if status in (Status.CHECKMATED, Status.RESIGNED)
        ]
        if len(losers) != 1 or Status.STALEMATED in self.players.values():
            return None
        return next(player for player in self.players if player != losers[0])

    def to_dict(self) -> dict[Color, Status]:
        return {player.color: status for player, status in self.players.items()}


@dataclass(frozen=True)
class Outcome:
    """One resolved turn. The first outcome of a game is the starting position (nothing requested, nothing performed)."""

    requested: tuple[Move, ...]
    performed: tuple[Move, ...]
    final_state: GameState
    status: GameStatus


def compute_status(
    rules: Rules, state: GameState, history: MoveHistory = ()
) -> GameStatus:
    return GameStatus(
        MappingProxyType(
            {player: player_status(rules, state, player, history) for player in rules.players}
        )
    )


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    rules: Rules
    outcomes: list[Outcome] = field(default_factory=list)
    pending: dict[Player, Move] = field(default_factory=dict)

    @classmethod
    def new_game(cls, rules: Rules) -> Game:
        """Start from the initial state of the given ruleset."""
        state = rules.initial_state
        initial_outcome = Outcome(
            requested=(),
            performed=(),
            final_state=state,
            status=compute_status(rules, state),
        )
        return cls(rules=rules, outcomes=[initial_outcome])

    # --- QUERIES ---
    @property
    def current_state(self) -> GameState:
        if self.outcomes:
            return self.outcomes[-1].final_state
        return self.rules.initial_state

    @property
    def status(self) -> GameStatus:
        if self.outcomes:
            return self.outcomes[-1].status
        return compute_status(self.rules, self.current_state)

    @property
    def previous_moves(self) -> list[tuple[Move, ...]]:
        """The performed moves of every turn so far"""
        return [outcome.performed for outcome in self.outcomes]

    @property
    def turn(self) -> int:
        """Number of turns that have been resolved"""
        return max(len(self.outcomes) - 1, 0)

    def state_at(self, turn: int) -> GameState:
        """Replay: the snapshot after the given turn (0 = starting position)"""
        if not 0 <= turn < len(self.outcomes):
            raise GameStateError(f"No turn {turn} in this game (played {self.turn} turns).")
        return self.outcomes[turn].final_state

    def player(self, color: Color) -> Player:
        try:
            return next(player for player in self.rules.players if player.color == color)
        except StopIteration:
            raise UnknownPlayerError(f"No {color} player in this game.") from None

    def legal_moves(self, piece: Piece) -> list[Move]:
        """Legal moves for a piece in the current state. Captured or unknown pieces have none."""
        return legal_moves_for_piece(
            self.rules, self.current_state, piece, self.previous_moves
        )

    def legal_moves_for(self, player: Player) -> list[Move]:
        return legal_moves_for_player(
            self.rules, self.current_state, player, self.previous_moves
        )

    def has_pending_move(self, player: Player) -> bool:
        return player in self.pending

    # --- COMMANDS ---
    def submit_move(self, player: Player, move: Move) -> Optional[Outcome]:
        """
        Submit (or replace) the player's move for the pending turn.
        -----

        Returns the new Outcome if this completes the turn, None if we are still waiting for the opponent.
        """
        self._assert_in_progress()
        self._assert_player(player)

        self._assert_matches_board(move)
        if move.player != player:
            raise IllegalMoveError(f"{move.piece} does not belong to {player}.")

        legal_moves = self.legal_moves(move.piece)
        if move not in legal_moves:
            raise IllegalMoveError(f"Move not allowed: {move}")

        # buffer the generated move, it carries the pieces as they stand on the board
        move = legal_moves[legal_moves.index(move)]
        self.pending[player] = move
        logger.debug(f"{player} submitted {move} for turn {self.turn + 1}")

        if self._all_moves_submitted():
            return self._commit()
        return None

    def withdraw_move(self, player: Player) -> Optional[Move]:
        """Take back a move that has not been committed yet"""
        self._assert_player(player)
        withdrawn = self.pending.pop(player, None)
        if withdrawn is not None:
            logger.debug(f"{player} withdrew {withdrawn}")
        return withdrawn

    def resign(self, player: Player) -> Outcome:
        """Resigning is not derived from the board. Record it as a turn without moves."""
        self._assert_in_progress()
        self._assert_player(player)

        self.pending.clear()
        players = dict(self.status.players)
        players[player] = Status.RESIGNED
        outcome = Outcome(
            requested=(),
            performed=(),
            final_state=self.current_state,
            status=GameStatus(MappingProxyType(players)),
        )
        self.outcomes.append(outcome)
        return outcome

    # -- PRIVATE HELPERS ---
    def _all_moves_submitted(self) -> bool:
        return all(player in self.pending for player in self.rules.players)

    def _commit(self) -> Outcome:
        """Resolve both pending moves against the current snapshot and append the outcome"""
        first_player, second_player = self.rules.players
        requested = (self.pending[first_player], self.pending[second_player])

        resolution = resolve_moves(*requested, self.current_state)
        history = self.previous_moves + [resolution.performed]
        outcome = Outcome(
            requested=requested,
            performed=resolution.performed,
            final_state=resolution.final_state,
            status=compute_status(self.rules, resolution.final_state, history),
        )

        self.outcomes.append(outcome)
        self.pending.clear()
        logger.info(
            f"Turn {self.turn} resolved: performed {[str(move) for move in outcome.performed]}"
        )
        return outcome

    def _assert_in_progress(self) -> None:
        if self.status.is_over:
            raise GameStateError(f"Game is over. status: {self.status.to_dict()}")

    def _assert_player(self, player: Player) -> None:
        if player not in self.rules.players:
            raise UnknownPlayerError(f"{player} is not playing this game.")

    def _assert_matches_board(self, move: Move) -> None:
        """Pieces compare by designation only: the owner and type of the submitted piece must be the ones on the board"""
        state = self.current_state
        square = state.position_of(move.piece)
        live_piece = state.piece_at(square) if square is not None else None
        if live_piece is None:
            raise IllegalMoveError(f"{move.piece} is not on the board.")
        if (live_piece.player, live_piece.type) != (move.piece.player, move.piece.type):
            raise IllegalMoveError(
                f"{move.piece} is a {live_piece.player} {live_piece.type.name.lower()} on the board."
            )
