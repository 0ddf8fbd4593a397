"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the candidate (pseudo-legal) move sets for each piece type.


Legality (not leaving your own king capturable) is checked later in legality.py
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Optional

from simulchess.chess.board import GameState
from simulchess.chess.pieces import Piece, PieceType, Player
from simulchess.chess.square import Position, Vector


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made: which piece goes where (and what it takes there)"""

    piece: Piece
    to_position: Position
    captured: Optional[Piece] = None

    @property
    def player(self) -> Player:
        return self.piece.player

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def capturing(self, piece: Piece) -> Move:
        """Same move, but now it takes `piece` (a forced capture decided during resolution)"""
        return replace(self, captured=piece)

    def __str__(self) -> str:
        description = f"{self.piece} -> {self.to_position}"
        if self.captured is not None:
            description += f" ({self.captured})"
        return description


# Moves performed in every turn played so far, oldest first
MoveHistory = Sequence[Sequence[Move]]


def has_moved(piece: Piece, history: MoveHistory) -> bool:
    """Scan the turn history for any move performed by this piece"""
    return any(move.piece == piece for turn in history for move in turn)


# --- DIRECTIONS ---
ORTHOGONALS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONALS: tuple[Vector, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
KNIGHT_JUMPS: tuple[Vector, ...] = (
    (2, 1),
    (1, 2),
    (2, -1),
    (1, -2),
    (-2, 1),
    (-1, 2),
    (-2, -1),
    (-1, -2),
)
KING_STEPS: tuple[Vector, ...] = ORTHOGONALS + DIAGONALS


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Position, state: GameState, directions: Sequence[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    Check the 'line of sight of a piece'.
    We walk along every direction until we hit another piece or the edge of the board.
    An enemy piece blocking the ray can be captured, a friendly one cannot.
    """
    piece = state.piece_at(square)
    if piece is None:
        return []

    moves: list[Move] = []
    for direction in directions:
        target_square = square.shifted(direction)
        while target_square.is_within_bounds(state.dimensions):
            occupant = state.piece_at(target_square)
            if occupant is not None:
                # only the first occupied square can be added, and only if it is the opponent's
                if occupant.is_enemy_of(piece):
                    moves.append(Move(piece, target_square, occupant))
                break

            moves.append(Move(piece, target_square))
            target_square = target_square.shifted(direction)
    return moves


def single_step_move(
    square: Position, state: GameState, deltas: Sequence[Vector]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump to a fixed set of squares"""
    piece = state.piece_at(square)
    if piece is None:
        return []

    moves: list[Move] = []
    for delta in deltas:
        target_square = square.shifted(delta)
        if not target_square.is_within_bounds(state.dimensions):
            continue

        occupant = state.piece_at(target_square)
        if occupant is None:
            moves.append(Move(piece, target_square))
        elif occupant.is_enemy_of(piece):
            moves.append(Move(piece, target_square, occupant))
    return moves


def candidate_pawn_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward (only onto an empty square).
    - can move by two if it never moved before in this game (and both squares are empty)
    - takes diagonally forward (only when there is an enemy piece to take)

    NOTE: "Never moved before" is decided by scanning the turn history, not by comparing against its starting square.
    """
    pawn = state.piece_at(square)
    if pawn is None:
        return []

    moves: list[Move] = []
    forward = pawn.player.forward

    one_step = square.shifted((forward, 0))
    if one_step.is_within_bounds(state.dimensions) and state.is_empty(one_step):
        moves.append(Move(pawn, one_step))

        two_steps = one_step.shifted((forward, 0))
        if (
            not has_moved(pawn, history)
            and two_steps.is_within_bounds(state.dimensions)
            and state.is_empty(two_steps)
        ):
            moves.append(Move(pawn, two_steps))

    # pawns take diagonally:
    for d_column in (-1, 1):
        target_square = square.shifted((forward, d_column))
        occupant = state.piece_at(target_square)
        if occupant is not None and occupant.is_enemy_of(pawn):
            moves.append(Move(pawn, target_square, occupant))
    return moves


def candidate_knight_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """Knights always jump such that |delta_row| + |delta_column| = 3"""
    return single_step_move(square, state, KNIGHT_JUMPS)


def candidate_bishop_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_column|"""
    return raycasting_move(square, state, DIAGONALS)


def candidate_rook_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, state, ORTHOGONALS)


def candidate_queen_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, state, ORTHOGONALS + DIAGONALS)


def candidate_king_moves(
    square: Position, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """The king can move by a single square at the time."""
    return single_step_move(square, state, KING_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, GameState, MoveHistory], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_moves(
    piece: Piece, state: GameState, history: MoveHistory = ()
) -> list[Move]:
    """
    Pseudo-legal moves of a single piece. A captured (or unknown) piece simply has none.

    NOTE: dispatch on the piece standing on the board. `piece` only identifies it by designation.
    """
    square = state.position_of(piece)
    if square is None:
        return []
    live_piece = state.piece_at(square)
    movement_rule = MOVEMENT_RULES[live_piece.type]
    return movement_rule(square, state, history)


# --- MOVE MATRIX ---
PieceMovesFn = Callable[[Piece, GameState, MoveHistory], list[Move]]


@dataclass(frozen=True)
class MoveMatrix:
    """
    All pseudo-legal moves on the board at once
    ----

    * available_moves: piece -> its candidate moves
    * threatened_positions: square -> the pieces that could move onto it (used for check detection and highlighting)
    """

    available_moves: Mapping[Piece, list[Move]]
    threatened_positions: Mapping[Position, frozenset[Piece]]

    @classmethod
    def generate(
        cls,
        state: GameState,
        history: MoveHistory = (),
        excluding: Collection[Player] = (),
        move_generator: PieceMovesFn = candidate_moves,
    ) -> MoveMatrix:
        available_moves: dict[Piece, list[Move]] = {}
        threatened: dict[Position, set[Piece]] = {}
        for piece in state.live_pieces():
            if piece.player in excluding:
                continue
            moves = move_generator(piece, state, history)
            available_moves[piece] = moves
            for move in moves:
                threatened.setdefault(move.to_position, set()).add(piece)

        return cls(
            MappingProxyType(available_moves),
            MappingProxyType(
                {position: frozenset(pieces) for position, pieces in threatened.items()}
            ),
        )

    def moves_of(self, piece: Piece) -> list[Move]:
        return list(self.available_moves.get(piece, []))

    def all_moves(self) -> list[Move]:
        return [move for moves in self.available_moves.values() for move in moves]

    def threats_to(self, position: Position) -> frozenset[Piece]:
        return self.threatened_positions.get(position, frozenset())
