"""
Engine settings

Read from the environment by the bootstrap collaborator (SIMULCHESS_LOG_LEVEL, SIMULCHESS_LOG_FILE, SIMULCHESS_VARIANT),
then used to configure logging and to pick the ruleset a new game is played with.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Optional, Self

from pydantic import BaseModel, field_validator

from simulchess.chess.rules import RegularRules, Rules
from simulchess.core.exceptions import InvalidRequestError
from simulchess.utils.logging import setup_logging

ENV_PREFIX = "SIMULCHESS_"

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

# Variant name -> factory of its Rules
VARIANTS: dict[str, Callable[[], Rules]] = {
    "regular": RegularRules,
}


def variant_name(value: str) -> str:
    """Normalized name of a known variant"""
    variant = value.strip().lower()
    if variant not in VARIANTS:
        raise InvalidRequestError(f"Unknown variant {value!r}. Pick one from {','.join(VARIANTS)}")
    return variant


class EngineSettings(BaseModel):
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    variant: str = "regular"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise InvalidRequestError(
                f"Unknown log level {value!r}. Pick one from {','.join(LOG_LEVELS)}"
            )
        return level

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, value: str) -> str:
        return variant_name(value)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Only the variables that are set override the defaults"""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**values)


def build_rules(variant: str) -> Rules:
    """Fresh ruleset of the named variant"""
    return VARIANTS[variant_name(variant)]()


def configure_logging(settings: EngineSettings) -> list[int]:
    return setup_logging(level=settings.log_level, log_file=settings.log_file)
