"""
A position on the board(s)

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from simulchess.core.exceptions import InvalidRequestError

# (d_row, d_column)
Vector = tuple[int, int]

COLUMN_NAMES = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class BoardDimensions:
    """Size of the playing area. Multi-board variants stack `boards` boards of equal size."""

    width: int
    height: int
    boards: int = 1

    def contains(self, position: Position) -> bool:
        return (
            (0 <= position.board < self.boards)
            and (0 <= position.row < self.height)
            and (0 <= position.column < self.width)
        )


# Regular chess board is 8x8. Variants supply their own dimensions through their Rules.
REGULAR_DIMENSIONS = BoardDimensions(width=8, height=8)


@dataclass(frozen=True)
class Position:
    """Zero-indexed square. Rows count away from white's home row, columns from the a-file."""

    row: int
    column: int
    board: int = 0

    @classmethod
    def from_algebraic(cls, sq: str, board: int = 0) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        sq = sq.strip().lower()
        if len(sq) < 2 or sq[0] not in COLUMN_NAMES or not sq[1:].isdigit():
            raise InvalidRequestError(f"Cannot interpret {sq!r} as a square name.")
        column = COLUMN_NAMES.index(sq[0])
        row = int(sq[1:]) - 1
        return cls(row, column, board)

    def to_algebraic(self) -> str:
        return f"{COLUMN_NAMES[self.column]}{self.row + 1}"

    def shifted(self, delta: Vector) -> Position:
        """The position `delta` away on the same board"""
        d_row, d_column = delta
        return Position(self.row + d_row, self.column + d_column, self.board)

    def is_within_bounds(self, dimensions: BoardDimensions = REGULAR_DIMENSIONS) -> bool:
        return dimensions.contains(self)

    def __str__(self) -> str:
        # only multi-board positions carry the board prefix
        if self.board:
            return f"{self.board}:{self.to_algebraic()}"
        return self.to_algebraic()
