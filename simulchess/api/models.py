"""Requests and Response models exchanged with the UI collaborator"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from simulchess.core.config import variant_name
from simulchess.core.exceptions import InvalidRequestError
from simulchess.core.shared_types import Color, Status

SquareName = str
Designation = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) < 2:
        return False
    return value[0].isalpha() and value[1:].isnumeric()


def _validate_square(value: str) -> str:
    value = value.strip().lower()
    if not _is_algebraic_notation(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    # None: play the variant the engine is configured with
    variant: Optional[str] = None

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return variant_name(value)


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    color: Color
    square: Optional[SquareName] = None

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    color: Color
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class WithdrawMoveRequest(BaseModel):
    game_id: UUID
    color: Color


class ResignRequest(BaseModel):
    game_id: UUID
    color: Color


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    turn: int
    board: dict[SquareName, Designation]
    captured: list[Designation]
    status: dict[Color, Status]
    pending: list[Color]
    last_performed: list[str]
    is_over: bool
    winner: Optional[Color] = None


class LegalMovesResponse(BaseModel):
    game_id: UUID
    color: Color
    legal_moves: list[str]


class SubmitMoveResponse(BaseModel):
    committed: bool
    game: GameResponse
