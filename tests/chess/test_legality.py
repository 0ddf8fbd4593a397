"""Unit tests for /simulchess/chess/legality.py"""

import pytest

from conftest import Placement, StateBuilder
from simulchess.chess.legality import (
    filter_legal_moves,
    has_legal_move,
    is_check,
    is_putting_yourself_in_check,
    legal_moves_for_piece,
    legal_moves_for_player,
    player_status,
)
from simulchess.chess.moves import Move
from simulchess.chess.pieces import BLACK, WHITE, PieceType
from simulchess.chess.rules import RegularRules
from simulchess.chess.square import Position
from simulchess.core.shared_types import Status

RULES = RegularRules()


@pytest.mark.parametrize(
    "pinned_type, pinned_square",
    [
        (PieceType.KNIGHT, "e2"),
        (PieceType.BISHOP, "e2"),
        (PieceType.ROOK, "d2"),
        (PieceType.QUEEN, "e2"),
        (PieceType.PAWN, "e2"),
    ],
)
def test_pinned_piece_cannot_leave_the_line(
    state_with: StateBuilder, pinned_type: PieceType, pinned_square: str
) -> None:
    """
    White king on e1 and a black rook on e8 (or bishop on a5 for the d2 square).
    The piece in between can only move along the pinning line (if at all).
    """
    pinner = (BLACK, PieceType.ROOK, "e8") if pinned_square == "e2" else (BLACK, PieceType.BISHOP, "a5")
    placements: list[Placement] = [
        (WHITE, PieceType.KING, "e1"),
        (BLACK, PieceType.KING, "h8"),
        pinner,
        (WHITE, pinned_type, pinned_square),
    ]
    state, pieces = state_with(placements)
    pinned = pieces[pinned_square]

    candidates = RULES.possible_moves(pinned, state)
    legal = filter_legal_moves(RULES, state, candidates)

    assert candidates, "fixture should give the pinned piece something to try"
    for move in legal:
        assert not is_putting_yourself_in_check(RULES, state, move)
    for move in set(candidates) - set(legal):
        assert is_putting_yourself_in_check(RULES, state, move)

    pin_line = (
        {Position.from_algebraic(sq) for sq in ("e2", "e3", "e4", "e5", "e6", "e7", "e8")}
        if pinned_square == "e2"
        else {Position.from_algebraic(sq) for sq in ("d2", "c3", "b4", "a5")}
    )
    assert all(move.to_position in pin_line for move in legal)


def test_pinned_rook_takes_the_pinning_piece(state_with: StateBuilder) -> None:
    state, pieces = state_with(
        [
            (WHITE, PieceType.KING, "e1"),
            (WHITE, PieceType.ROOK, "e2"),
            (BLACK, PieceType.ROOK, "e8"),
            (BLACK, PieceType.KING, "a8"),
        ]
    )
    legal = legal_moves_for_piece(RULES, state, pieces["e2"])
    assert Move(pieces["e2"], Position.from_algebraic("e8"), pieces["e8"]) in legal
    assert {move.to_position.column for move in legal} == {4}


def test_king_cannot_step_into_attack(state_with: StateBuilder) -> None:
    state, pieces = state_with(
        [
            (WHITE, PieceType.KING, "e1"),
            (BLACK, PieceType.ROOK, "d8"),
            (BLACK, PieceType.KING, "h8"),
        ]
    )
    legal = legal_moves_for_piece(RULES, state, pieces["e1"])
    assert {move.to_position.to_algebraic() for move in legal} == {"e2", "f1", "f2"}


def test_empty_candidates_give_empty_result(state_with: StateBuilder) -> None:
    state, _ = state_with([(WHITE, PieceType.KING, "e1")])
    assert filter_legal_moves(RULES, state, []) == []


def test_captured_piece_has_no_legal_moves(state_with: StateBuilder) -> None:
    state, pieces = state_with([(WHITE, PieceType.ROOK, "a1"), (BLACK, PieceType.ROOK, "a8")])
    after = state.apply_moves([Move(pieces["a8"], Position.from_algebraic("a1"), pieces["a1"])])
    assert legal_moves_for_piece(RULES, after, pieces["a1"]) == []


def test_check_detection(state_with: StateBuilder) -> None:
    state, _ = state_with(
        [
            (WHITE, PieceType.KING, "e1"),
            (BLACK, PieceType.QUEEN, "e5"),
            (BLACK, PieceType.KING, "e8"),
        ]
    )
    assert is_check(RULES, state, WHITE)
    assert not is_check(RULES, state, BLACK)


def test_checkmate(state_with: StateBuilder) -> None:
    """Back rank mate: king boxed in by its own pawns, rook on the back rank"""
    state, _ = state_with(
        [
            (WHITE, PieceType.KING, "g1"),
            (WHITE, PieceType.PAWN, "f2"),
            (WHITE, PieceType.PAWN, "g2"),
            (WHITE, PieceType.PAWN, "h2"),
            (BLACK, PieceType.ROOK, "a1"),
            (BLACK, PieceType.KING, "g8"),
        ]
    )
    assert is_check(RULES, state, WHITE)
    assert not has_legal_move(RULES, state, WHITE)
    assert player_status(RULES, state, WHITE) == Status.CHECKMATED
    assert player_status(RULES, state, BLACK) == Status.ONGOING


def test_stalemate(state_with: StateBuilder) -> None:
    """King in the corner, queen covering every escape square without giving check"""
    state, _ = state_with(
        [
            (WHITE, PieceType.KING, "a1"),
            (BLACK, PieceType.QUEEN, "b3"),
            (BLACK, PieceType.KING, "h8"),
        ]
    )
    assert not is_check(RULES, state, WHITE)
    assert legal_moves_for_player(RULES, state, WHITE) == []
    assert player_status(RULES, state, WHITE) == Status.STALEMATED


def test_checked_but_can_escape(state_with: StateBuilder) -> None:
    state, _ = state_with(
        [
            (WHITE, PieceType.KING, "e1"),
            (BLACK, PieceType.ROOK, "e5"),
            (BLACK, PieceType.KING, "e8"),
        ]
    )
    assert player_status(RULES, state, WHITE) == Status.CHECKED


def test_captured_king_counts_as_checkmated(state_with: StateBuilder) -> None:
    state, pieces = state_with(
        [
            (WHITE, PieceType.KING, "e1"),
            (BLACK, PieceType.ROOK, "e5"),
            (BLACK, PieceType.KING, "e8"),
        ]
    )
    after = state.apply_moves([Move(pieces["e5"], Position.from_algebraic("e1"), pieces["e1"])])
    assert player_status(RULES, after, WHITE) == Status.CHECKMATED
