"""Unit tests for simulchess/core/config.py"""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from simulchess.chess.rules import RegularRules
from simulchess.core.config import EngineSettings, build_rules, configure_logging, variant_name
from simulchess.core.exceptions import InvalidRequestError


def test_defaults() -> None:
    settings = EngineSettings.from_env({})
    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.variant == "regular"


def test_read_from_environment() -> None:
    settings = EngineSettings.from_env(
        {
            "SIMULCHESS_LOG_LEVEL": "debug",
            "SIMULCHESS_LOG_FILE": "logs/engine.log",
            "SIMULCHESS_VARIANT": "Regular",
            "UNRELATED": "ignored",
        }
    )
    assert settings.log_level == "DEBUG"
    assert settings.log_file == Path("logs/engine.log")
    assert settings.variant == "regular"


def test_reads_os_environ_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIMULCHESS_LOG_LEVEL", "warning")
    monkeypatch.delenv("SIMULCHESS_VARIANT", raising=False)
    monkeypatch.delenv("SIMULCHESS_LOG_FILE", raising=False)
    settings = EngineSettings.from_env()
    assert settings.log_level == "WARNING"
    assert settings.variant == "regular"


@pytest.mark.parametrize(
    "environ",
    [
        {"SIMULCHESS_LOG_LEVEL": "chatty"},
        {"SIMULCHESS_VARIANT": "fischer_random"},
    ],
)
def test_invalid_settings(environ: dict[str, str]) -> None:
    with pytest.raises(ValidationError):
        EngineSettings.from_env(environ)


def test_build_rules() -> None:
    rules = build_rules(EngineSettings().variant)
    assert isinstance(rules, RegularRules)
    assert len(rules.pieces) == 32
    assert build_rules(" REGULAR") is not rules


def test_unknown_variant() -> None:
    assert variant_name("Regular") == "regular"
    with pytest.raises(InvalidRequestError):
        build_rules("kriegspiel")


def test_configure_logging() -> None:
    settings = EngineSettings(log_level="error", log_file=Path("engine.log"))
    with patch("simulchess.core.config.setup_logging") as setup:
        configure_logging(settings)
    setup.assert_called_once_with(level="ERROR", log_file=Path("engine.log"))
