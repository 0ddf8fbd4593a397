"""Defines the players and the types of chess pieces"""

from dataclasses import dataclass, field
from enum import Enum, auto

from simulchess.core.shared_types import Color


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


# NOTE: Not a material value. Only used to decide who wins when both submitted moves collide.
RESOLUTION_PRIORITY: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 2,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 4,
    PieceType.QUEEN: 5,
    PieceType.KING: 6,
}


@dataclass(frozen=True)
class Player:
    """
    A player is identified by its color. The orientation tells in which direction its pawns march.

    forward = +1: starts on row 0 and moves up the board (white)
    forward = -1: starts on the last row and moves down the board (black)
    """

    color: Color
    forward: int

    def home_row(self, board_height: int) -> int:
        return 0 if self.forward > 0 else board_height - 1

    def pawn_row(self, board_height: int) -> int:
        return self.home_row(board_height) + self.forward

    def __str__(self) -> str:
        return self.color.value


WHITE = Player(Color.WHITE, forward=1)
BLACK = Player(Color.BLACK, forward=-1)


@dataclass(frozen=True)
class Piece:
    """
    A piece keeps its identity for the entire game.

    Equality/hashing only look at the designation: the same logical piece can then be tracked from one board snapshot
    to the next, no matter where it stands (or whether it got captured).
    """

    player: Player = field(compare=False)
    type: PieceType = field(compare=False)
    designation: str

    @property
    def priority(self) -> int:
        return RESOLUTION_PRIORITY[self.type]

    def outranks(self, other: "Piece") -> bool:
        return self.priority > other.priority

    def is_enemy_of(self, other: "Piece") -> bool:
        return self.player != other.player

    def __str__(self) -> str:
        return self.designation
