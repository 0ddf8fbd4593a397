"""
Custom exceptions raised by the domain and service layers.

Everything inherits from GameError so a caller (UI, bootstrap) can catch all game related problems in one place.
"""


class GameError(Exception):
    """Base class for all errors raised by the engine."""


class GameStateError(GameError):
    """The requested operation is not allowed in the current state of the game (or would corrupt the board)."""


class IllegalMoveError(GameError):
    """The submitted move is not one of the legal moves available to the player."""


class UnknownPlayerError(GameError):
    """The player/color is not taking part in this game."""


class ResolutionError(GameError):
    """
    Contract violation of the conflict resolver.

    Can only happen if the caller mis-sequences calls (ex. two moves of the same player in one turn).
    """


class RepositoryError(GameError):
    """Game could not be found (or stored) in the repository."""


class InvalidRequestError(GameError, ValueError):
    """
    Request data could not be interpreted.

    NOTE: also a ValueError, so pydantic wraps it into a ValidationError when raised inside a validator.
    """
