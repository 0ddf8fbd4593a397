"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/helpers required for testing multiple layers.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Callable

import pytest

from simulchess.chess.board import GameState
from simulchess.chess.pieces import BLACK, WHITE, Piece, PieceType, Player
from simulchess.chess.rules import RegularRules
from simulchess.chess.square import REGULAR_DIMENSIONS, Position

# (owner, piece type, square in algebraic notation)
Placement = tuple[Player, PieceType, str]
StateBuilder = Callable[[list[Placement]], tuple[GameState, dict[str, Piece]]]


def make_piece(player: Player, piece_type: PieceType, square: str) -> Piece:
    """Designation derived from the starting square, ex. 'white_rook_d4'"""
    return Piece(player, piece_type, f"{player.color.value}_{piece_type.name.lower()}_{square}")


def build_state(placements: list[Placement]) -> tuple[GameState, dict[str, Piece]]:
    """Create a snapshot with only the given pieces. Also returns the pieces by their starting square."""
    pieces: dict[str, Piece] = {}
    positions: dict[Piece, Position] = {}
    for player, piece_type, square in placements:
        piece = make_piece(player, piece_type, square)
        pieces[square] = piece
        positions[piece] = Position.from_algebraic(square)
    return GameState.from_pieces(REGULAR_DIMENSIONS, positions), pieces


@dataclass(frozen=True)
class PositionRules(RegularRules):
    """Regular rules, but starting from a custom position"""

    placements: tuple[tuple[Piece, Position], ...] = ()

    @cached_property
    def starting_placements(self) -> dict[Piece, Position]:
        return dict(self.placements)


def rules_from(placements: list[Placement]) -> tuple[PositionRules, dict[str, Piece]]:
    state, pieces = build_state(placements)
    rules = PositionRules(placements=tuple(state.piece_to_position.items()))
    return rules, pieces


@pytest.fixture
def state_with() -> StateBuilder:
    """Call the returned function with the pieces that should be on the board"""
    return build_state


@pytest.fixture
def regular_rules() -> RegularRules:
    return RegularRules()


@pytest.fixture
def kings_only() -> list[Placement]:
    """Kings on their canonical starting squares. Status computation needs both kings on the board."""
    return [(WHITE, PieceType.KING, "e1"), (BLACK, PieceType.KING, "e8")]
