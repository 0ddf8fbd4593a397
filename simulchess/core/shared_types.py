"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    """Per-player status after a turn has been resolved."""

    ONGOING = "ongoing"
    CHECKED = "checked"
    CHECKMATED = "checkmated"
    STALEMATED = "stalemated"
    RESIGNED = "resigned"


# Statuses after which a player can no longer submit moves
TERMINAL_STATUSES: frozenset[Status] = frozenset(
    {Status.CHECKMATED, Status.STALEMATED, Status.RESIGNED}
)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
