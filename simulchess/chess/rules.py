"""
Variant specific configuration: board size, players, starting pieces and how pieces move.

The engine never reaches for a global ruleset. A Rules instance gets passed into the Game instead,
so multiple variants can live side by side.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Protocol

from simulchess.chess.board import GameState
from simulchess.chess.moves import Move, MoveHistory, candidate_moves
from simulchess.chess.pieces import BLACK, WHITE, Piece, PieceType, Player
from simulchess.chess.square import REGULAR_DIMENSIONS, BoardDimensions, Position


class Rules(Protocol):
    """What the engine needs to know about a variant"""

    @property
    def dimensions(self) -> BoardDimensions: ...
    @property
    def players(self) -> tuple[Player, Player]: ...
    @property
    def pieces(self) -> list[Piece]: ...
    @property
    def initial_state(self) -> GameState: ...
    def possible_moves(
        self, piece: Piece, state: GameState, history: MoveHistory = ()
    ) -> list[Move]: ...
    def is_checking(self, move: Move) -> bool: ...


# Which side of the board (queen/king) each back-rank piece belongs to, ordered by column.
# The pawn in front of a piece is its guard and inherits its designation.
FEALTY: tuple[tuple[PieceType, PieceType], ...] = (
    (PieceType.QUEEN, PieceType.ROOK),
    (PieceType.QUEEN, PieceType.KNIGHT),
    (PieceType.QUEEN, PieceType.BISHOP),
    (PieceType.QUEEN, PieceType.QUEEN),
    (PieceType.KING, PieceType.KING),
    (PieceType.KING, PieceType.BISHOP),
    (PieceType.KING, PieceType.KNIGHT),
    (PieceType.KING, PieceType.ROOK),
)


def piece_designation(player: Player, side: PieceType, piece_type: PieceType) -> str:
    """ex. 'white_queen_rook' for the rook on a1, 'white_queen_rook_pawn' for the pawn guarding it"""
    return f"{player.color.value}_{side.name.lower()}_{piece_type.name.lower()}"


def regular_initial_pieces(
    players: tuple[Player, ...], dimensions: BoardDimensions
) -> dict[Piece, Position]:
    """Every player gets the fealty line on their home row, with a pawn in front of every piece."""
    placements: dict[Piece, Position] = {}
    for player in players:
        home_row = player.home_row(dimensions.height)
        pawn_row = player.pawn_row(dimensions.height)
        for column, (side, piece_type) in enumerate(FEALTY):
            designation = piece_designation(player, side, piece_type)
            placements[Piece(player, piece_type, designation)] = Position(home_row, column)
            placements[Piece(player, PieceType.PAWN, f"{designation}_pawn")] = Position(
                pawn_row, column
            )
    return placements


@dataclass(frozen=True)
class RegularRules:
    """Standard 8x8 board, standard pieces. Both players move at the same time."""

    dimensions: BoardDimensions = REGULAR_DIMENSIONS
    players: tuple[Player, Player] = field(default=(WHITE, BLACK))

    @cached_property
    def starting_placements(self) -> dict[Piece, Position]:
        return regular_initial_pieces(self.players, self.dimensions)

    @property
    def pieces(self) -> list[Piece]:
        return sorted(self.starting_placements, key=lambda piece: piece.designation)

    @property
    def initial_state(self) -> GameState:
        return GameState.from_pieces(self.dimensions, self.starting_placements)

    def possible_moves(
        self, piece: Piece, state: GameState, history: MoveHistory = ()
    ) -> list[Move]:
        return candidate_moves(piece, state, history)

    def is_checking(self, move: Move) -> bool:
        """A move 'checks' if it would take the king"""
        return move.captured is not None and move.captured.type == PieceType.KING
