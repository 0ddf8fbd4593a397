"""
Legality filter and status computation
----

A candidate move is legal if, after making it, none of the opponent's candidate moves would take your king.
We simply simulate every candidate move on a fresh snapshot and regenerate the opponent's moves (no attack tables).
"""

from simulchess.chess.board import GameState
from simulchess.chess.moves import Move, MoveHistory, MoveMatrix
from simulchess.chess.pieces import Piece, PieceType, Player
from simulchess.chess.rules import Rules
from simulchess.core.shared_types import Status


def opponent_matrix(
    rules: Rules, state: GameState, player: Player, history: MoveHistory = ()
) -> MoveMatrix:
    """Candidate moves of every piece that does NOT belong to `player`"""
    return MoveMatrix.generate(
        state, history, excluding=[player], move_generator=rules.possible_moves
    )


def is_putting_yourself_in_check(
    rules: Rules, state: GameState, move: Move, history: MoveHistory = ()
) -> bool:
    """
    Return True if the move leaves your own king capturable

    plan:
    1. derive the snapshot after the candidate move
    2. generate all candidate moves of the opponent on that snapshot
    3. is any of them taking the king?
    """
    hypothetical = state.apply_moves([move])
    replies = opponent_matrix(rules, hypothetical, move.player, history)
    return any(rules.is_checking(reply) for reply in replies.all_moves())


def filter_legal_moves(
    rules: Rules, state: GameState, candidates: list[Move], history: MoveHistory = ()
) -> list[Move]:
    """keep those moves that do not put (or leave) you in check"""
    return [
        move
        for move in candidates
        if not is_putting_yourself_in_check(rules, state, move, history)
    ]


def legal_moves_for_piece(
    rules: Rules, state: GameState, piece: Piece, history: MoveHistory = ()
) -> list[Move]:
    """Captured/unknown pieces have no moves (not an error)"""
    candidates = rules.possible_moves(piece, state, history)
    return filter_legal_moves(rules, state, candidates, history)


def legal_moves_for_player(
    rules: Rules, state: GameState, player: Player, history: MoveHistory = ()
) -> list[Move]:
    return [
        move
        for piece in state.pieces_of(player)
        for move in legal_moves_for_piece(rules, state, piece, history)
    ]


# --- CHECKS FOR ENDING THE GAME ---
def is_check(
    rules: Rules, state: GameState, player: Player, history: MoveHistory = ()
) -> bool:
    """Is the king of `player` standing on a square any opposing piece could move to?"""
    king_square = state.locate_king(player)
    if king_square is None:
        return False
    threats = opponent_matrix(rules, state, player, history).threats_to(king_square)
    return bool(threats)


def is_king_captured(state: GameState, player: Player) -> bool:
    return any(
        piece.player == player and piece.type == PieceType.KING
        for piece in state.captured
    )


def has_legal_move(
    rules: Rules, state: GameState, player: Player, history: MoveHistory = ()
) -> bool:
    # short-circuits on the first piece with a legal move
    return any(
        legal_moves_for_piece(rules, state, piece, history)
        for piece in state.pieces_of(player)
    )


def player_status(
    rules: Rules, state: GameState, player: Player, history: MoveHistory = ()
) -> Status:
    """
    * checked: king can be taken by an opposing candidate move
    * checkmated: checked and no legal move left
    * stalemated: not checked, but no legal move left either

    NOTE: A player whose king got taken during resolution counts as checkmated.
    """
    if is_king_captured(state, player):
        return Status.CHECKMATED

    checked = is_check(rules, state, player, history)
    if has_legal_move(rules, state, player, history):
        return Status.CHECKED if checked else Status.ONGOING
    return Status.CHECKMATED if checked else Status.STALEMATED
