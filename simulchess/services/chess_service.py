"""Orchestration of communication from the UI collaborator to the game logic (and the reverse direction)."""

from typing import Optional, Self
from uuid import UUID

from loguru import logger

from simulchess.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ResignRequest,
    SubmitMoveResponse,
    WithdrawMoveRequest,
)
from simulchess.chess.board import GameState
from simulchess.chess.game import Game
from simulchess.chess.moves import Move
from simulchess.chess.pieces import Piece, Player
from simulchess.chess.square import Position
from simulchess.core.config import EngineSettings, build_rules, configure_logging
from simulchess.core.exceptions import IllegalMoveError, RepositoryError
from simulchess.db.repository import GameRepository


def move_to_uci(move: Move, state_before: GameState) -> str:
    """<from square><to square>, with the from square looked up on the snapshot the move was made on"""
    from_square = state_before.position_of(move.piece)
    origin = from_square.to_algebraic() if from_square is not None else "?"
    return f"{origin}{move.to_position.to_algebraic()}"


class SimultaneousChessService:
    """Orchestration of layers for simultaneous chess."""

    def __init__(
        self, repository: GameRepository, settings: Optional[EngineSettings] = None
    ) -> None:
        self.repo = repository
        self.settings = settings if settings is not None else EngineSettings()

    @classmethod
    def from_env(cls, repository: GameRepository) -> Self:
        """Bootstrap: read the SIMULCHESS_* settings and install the log sinks before serving requests"""
        settings = EngineSettings.from_env()
        configure_logging(settings)
        return cls(repository, settings)

    # -- UI requests logic ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        variant = request.variant or self.settings.variant
        game = Game.new_game(build_rules(variant))
        stored_game, game_id = self.repo.create_game(game)
        logger.info(f"Created {variant} game {game_id}")
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by the UI to check whether the opponent submitted / the turn got resolved.
        """
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Legal moves of one player, or of the piece on the requested square only."""
        game = self._fetch_game(request.game_id)
        player = game.player(request.color)
        state = game.current_state

        if request.square is None:
            moves = game.legal_moves_for(player)
        else:
            piece = self._own_piece_on(state, request.square, player)
            moves = game.legal_moves(piece) if piece is not None else []

        return LegalMovesResponse(
            game_id=request.game_id,
            color=request.color,
            legal_moves=[move_to_uci(move, state) for move in moves],
        )

    def submit_move(self, request: MoveRequest) -> SubmitMoveResponse:
        """Buffer the player's move. Resolves the turn if the opponent already submitted theirs."""
        game = self._fetch_game(request.game_id)
        player = game.player(request.color)

        move = self._find_legal_move(game, player, request.from_square, request.to_square)
        outcome = game.submit_move(player, move)
        self.repo.update_game(request.game_id, game)

        return SubmitMoveResponse(
            committed=outcome is not None,
            game=self._create_game_response(request.game_id, game),
        )

    def withdraw_move(self, request: WithdrawMoveRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.withdraw_move(game.player(request.color))
        self.repo.update_game(request.game_id, game)
        return self._create_game_response(request.game_id, game)

    def resign(self, request: ResignRequest) -> GameResponse:
        game = self._fetch_game(request.game_id)
        game.resign(game.player(request.color))
        self.repo.update_game(request.game_id, game)
        logger.info(f"{request.color} resigned game {request.game_id}")
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)
        logger.info(f"Deleted game {request.game_id}")

    # -- Internal helpers --
    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        state = game.current_state
        status = game.status
        winner = status.winner

        # the moves of the last turn were made on the snapshot before it
        state_before = game.state_at(game.turn - 1) if game.turn > 0 else state
        last_performed = game.outcomes[-1].performed if game.outcomes else ()

        return GameResponse(
            game_id=game_id,
            turn=game.turn,
            board={
                position.to_algebraic(): piece.designation
                for piece, position in state.piece_to_position.items()
            },
            captured=[piece.designation for piece in state.captured],
            status=status.to_dict(),
            pending=[player.color for player in game.rules.players if game.has_pending_move(player)],
            last_performed=[move_to_uci(move, state_before) for move in last_performed],
            is_over=status.is_over,
            winner=winner.color if winner is not None else None,
        )

    def _own_piece_on(
        self, state: GameState, square: str, player: Player
    ) -> Optional[Piece]:
        piece = state.piece_at(Position.from_algebraic(square))
        if piece is None or piece.player != player:
            return None
        return piece

    def _find_legal_move(
        self, game: Game, player: Player, from_square: str, to_square: str
    ) -> Move:
        piece = self._own_piece_on(game.current_state, from_square, player)
        if piece is None:
            raise IllegalMoveError(f"{player} has no piece on {from_square}.")

        destination = Position.from_algebraic(to_square)
        try:
            return next(
                move for move in game.legal_moves(piece) if move.to_position == destination
            )
        except StopIteration:
            raise IllegalMoveError(f"Move not allowed: {from_square}{to_square}") from None

    def _fetch_game(self, game_id: UUID) -> Game:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game
