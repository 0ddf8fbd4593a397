"""Unit tests for /simulchess/chess/rules.py"""

import pytest

from simulchess.chess.moves import Move
from simulchess.chess.pieces import BLACK, WHITE, Piece, PieceType
from simulchess.chess.rules import FEALTY, RegularRules, piece_designation
from simulchess.chess.square import Position


def test_regular_rules_has_32_unique_pieces(regular_rules: RegularRules) -> None:
    pieces = regular_rules.pieces
    assert len(pieces) == 32
    assert len({piece.designation for piece in pieces}) == 32
    assert pieces == sorted(pieces, key=lambda piece: piece.designation)


@pytest.mark.parametrize(
    "square, player, piece_type",
    [
        ("a1", WHITE, PieceType.ROOK),
        ("b1", WHITE, PieceType.KNIGHT),
        ("c1", WHITE, PieceType.BISHOP),
        ("d1", WHITE, PieceType.QUEEN),
        ("e1", WHITE, PieceType.KING),
        ("h1", WHITE, PieceType.ROOK),
        ("e2", WHITE, PieceType.PAWN),
        ("d8", BLACK, PieceType.QUEEN),
        ("e8", BLACK, PieceType.KING),
        ("g8", BLACK, PieceType.KNIGHT),
        ("a7", BLACK, PieceType.PAWN),
    ],
)
def test_starting_layout(
    regular_rules: RegularRules, square: str, player, piece_type: PieceType
) -> None:
    piece = regular_rules.initial_state.piece_at(Position.from_algebraic(square))
    assert piece is not None
    assert piece.player == player
    assert piece.type == piece_type


def test_designations_follow_fealty(regular_rules: RegularRules) -> None:
    state = regular_rules.initial_state
    assert state.piece_at(Position.from_algebraic("a1")).designation == "white_queen_rook"
    assert state.piece_at(Position.from_algebraic("a2")).designation == "white_queen_rook_pawn"
    assert state.piece_at(Position.from_algebraic("g8")).designation == "black_king_knight"
    assert state.piece_at(Position.from_algebraic("e7")).designation == "black_king_king_pawn"
    assert piece_designation(WHITE, *FEALTY[2]) == "white_queen_bishop"


def test_middle_of_the_board_is_empty(regular_rules: RegularRules) -> None:
    state = regular_rules.initial_state
    for row in range(2, 6):
        for column in range(8):
            assert state.is_empty(Position(row, column))


def test_rules_instances_are_independent() -> None:
    """No global state: every ruleset hands out fresh snapshots"""
    first = RegularRules()
    second = RegularRules()
    assert first.initial_state == second.initial_state
    assert first.initial_state is not second.initial_state


def test_is_checking(regular_rules: RegularRules) -> None:
    rook = Piece(WHITE, PieceType.ROOK, "rook")
    king = Piece(BLACK, PieceType.KING, "king")
    queen = Piece(BLACK, PieceType.QUEEN, "queen")
    square = Position(7, 4)
    assert regular_rules.is_checking(Move(rook, square, king))
    assert not regular_rules.is_checking(Move(rook, square, queen))
    assert not regular_rules.is_checking(Move(rook, square))


def test_opening_moves(regular_rules: RegularRules) -> None:
    """Every pawn has a single and double step, every knight two jumps. Nothing else can move."""
    state = regular_rules.initial_state
    counts = {
        piece.designation: len(regular_rules.possible_moves(piece, state))
        for piece in regular_rules.pieces
    }
    assert counts["white_queen_knight"] == 2
    assert counts["white_queen_rook_pawn"] == 2
    assert counts["black_king_king"] == 0
    assert sum(counts.values()) == 40
