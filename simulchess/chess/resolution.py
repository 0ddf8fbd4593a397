"""
Conflict resolution: turn the two moves submitted for the same turn into the moves that actually happen.

Both moves were legal on the snapshot before the turn. They are checked against each other in this order
(first match wins):

1. Same destination square: the piece with the higher resolution priority gets there and takes the other one.
2. Mutual capture: both moves take the other's moving piece. Both happen, both pieces are gone afterwards.
3. One-sided capture: one move takes the other's moving piece. A higher priority attacker catches it before it leaves,
   a lower priority attacker still takes it on its new square.
4. No interaction: both moves happen.

Equal priorities in case 1 or 3 leave both pieces where they are.
"""

from dataclasses import dataclass

from loguru import logger

from simulchess.chess.board import GameState
from simulchess.chess.moves import Move
from simulchess.core.exceptions import ResolutionError


@dataclass(frozen=True)
class Resolution:
    """The moves that were performed and the snapshot after committing them"""

    performed: tuple[Move, ...]
    final_state: GameState


def resolve_moves(first: Move, second: Move, state: GameState) -> Resolution:
    """Adjudicate one move per player and commit the result as a single batch on `state`"""
    if first.player == second.player:
        raise ResolutionError(
            f"Both moves belong to {first.player}: {first} and {second}. Need exactly one move per player."
        )

    performed = performed_moves(first, second)
    return Resolution(performed, state.apply_moves(performed))


def performed_moves(first: Move, second: Move) -> tuple[Move, ...]:
    """Decide which of the two requested moves go through (possibly annotated with a forced capture)."""
    if first.to_position == second.to_position:
        logger.debug(f"Contested square {first.to_position}: {first.piece} vs {second.piece}")
        return _resolve_contested_square(first, second)

    if first.captured == second.piece and second.captured == first.piece:
        logger.debug(f"Mutual capture between {first.piece} and {second.piece}")
        return (first, second)

    if first.captured == second.piece:
        logger.debug(f"{first.piece} attacks the moving {second.piece}")
        attacker, target = _resolve_one_sided_capture(first, second)
        return _in_requested_order((attacker, target))

    if second.captured == first.piece:
        logger.debug(f"{second.piece} attacks the moving {first.piece}")
        attacker, target = _resolve_one_sided_capture(second, first)
        return _in_requested_order((target, attacker))

    return (first, second)


# TODO: equal priority leaves both pieces in place until the territory based tie-break gets decided.
def _resolve_contested_square(first: Move, second: Move) -> tuple[Move, ...]:
    """The higher priority piece takes the square and captures the other mover on its way."""
    if first.piece.outranks(second.piece):
        return (first.capturing(second.piece),)
    if second.piece.outranks(first.piece):
        return (second.capturing(first.piece),)
    return ()


def _resolve_one_sided_capture(
    attacker: Move, target: Move
) -> tuple[Move | None, Move | None]:
    """
    `attacker` takes the piece that `target` is moving.

    * attacker outranks: the target piece is caught before it can leave. Its move gets discarded.
    * target outranks: both moves happen as requested. The target still gets taken (apply_moves relocates before it removes).
    * equal priority: nobody moves.
    """
    if attacker.piece.outranks(target.piece):
        return attacker, None
    if target.piece.outranks(attacker.piece):
        return attacker, target
    return None, None


def _in_requested_order(moves: tuple[Move | None, Move | None]) -> tuple[Move, ...]:
    return tuple(move for move in moves if move is not None)
