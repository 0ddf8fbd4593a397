"""The Board Model: an immutable snapshot of where every live piece stands (and which pieces got captured)"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from simulchess.chess.pieces import Piece, PieceType, Player
from simulchess.chess.square import BoardDimensions, Position
from simulchess.core.exceptions import GameStateError

if TYPE_CHECKING:
    from simulchess.chess.moves import Move


@dataclass(frozen=True, eq=False)
class GameState:
    """
    Snapshot of the board
    ----

    Holds two maps that are exact inverses of each other:
    * piece -> position (only pieces that are still on the board)
    * position -> piece

    plus the ordered list of captured pieces.

    ---
    Only two ways to get one:
    1. `GameState.from_pieces()` for the starting position of a game
    2. `state.apply_moves()` to derive the snapshot after a turn
    """

    dimensions: BoardDimensions
    piece_to_position: Mapping[Piece, Position]
    position_to_piece: Mapping[Position, Piece]
    captured: tuple[Piece, ...] = ()

    @classmethod
    def from_pieces(
        cls, dimensions: BoardDimensions, placements: Mapping[Piece, Position]
    ) -> GameState:
        """Starting position: every piece on its starting square, nothing captured yet."""
        return cls._build(dimensions, dict(placements), ())

    @classmethod
    def _build(
        cls,
        dimensions: BoardDimensions,
        piece_to_position: dict[Piece, Position],
        captured: tuple[Piece, ...],
    ) -> GameState:
        """Derive the inverse map and make sure no square is claimed twice."""
        position_to_piece: dict[Position, Piece] = {}
        for piece, position in piece_to_position.items():
            if not dimensions.contains(position):
                raise GameStateError(f"{piece} placed outside of the board at {position}")
            if position in position_to_piece:
                raise GameStateError(
                    f"Both {position_to_piece[position]} and {piece} occupy {position}"
                )
            position_to_piece[position] = piece
        return cls(
            dimensions,
            MappingProxyType(piece_to_position),
            MappingProxyType(position_to_piece),
            captured,
        )

    # --- QUERIES ---
    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.position_to_piece.get(position)

    def position_of(self, piece: Piece) -> Optional[Position]:
        """None if the piece got captured (or never took part in this game)"""
        return self.piece_to_position.get(piece)

    def is_empty(self, position: Position) -> bool:
        return position not in self.position_to_piece

    def is_live(self, piece: Piece) -> bool:
        return piece in self.piece_to_position

    def live_pieces(self) -> list[Piece]:
        return list(self.piece_to_position)

    def pieces_of(self, player: Player) -> list[Piece]:
        return [piece for piece in self.piece_to_position if piece.player == player]

    def locate_king(self, player: Player) -> Optional[Position]:
        return next(
            (
                position
                for piece, position in self.piece_to_position.items()
                if piece.player == player and piece.type == PieceType.KING
            ),
            None,
        )

    # --- TRANSFORM ---
    def apply_moves(self, moves: Iterable[Move]) -> GameState:
        """
        Commit a batch of moves made against this snapshot.
        ----

        1. update the position of every moving piece
        2. remove every captured piece

        NOTE: In that order! A piece that moves AND gets captured during the same turn ends up captured,
        never lingering on its destination square.
        """
        moves = list(moves)
        new_positions = dict(self.piece_to_position)
        captured = list(self.captured)

        for move in moves:
            if move.piece in new_positions:
                new_positions[move.piece] = move.to_position

        for move in moves:
            if move.captured is not None and move.captured in new_positions:
                del new_positions[move.captured]
                captured.append(move.captured)

        return self._build(self.dimensions, new_positions, tuple(captured))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            dict(self.piece_to_position) == dict(other.piece_to_position)
            and self.captured == other.captured
        )

    __hash__ = None  # type: ignore[assignment]
