"""
Engine configuration (imperative shell).

Settings come from environment variables (`settings_from_env`) or a YAML file
(`load_settings`). Environment parsing is forgiving: garbage falls back to the
default and integers are clamped. YAML parsing is fail-closed.

Keys:
- `min_commands` / `STATEM_MIN_COMMANDS`: shortest generated sequence
- `max_commands` / `STATEM_MAX_COMMANDS`: longest generated sequence
- `log_level` / `STATEM_LOG_LEVEL`: level of the `statem` logger
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import StatemError
from ..core.generator import DEFAULT_MAX_COMMANDS, DEFAULT_MIN_COMMANDS

MAX_COMMANDS_LIMIT = 10_000
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(StatemError):
    """Raised on malformed configuration."""


@dataclass(frozen=True)
class StatemSettings:
    min_commands: int = DEFAULT_MIN_COMMANDS
    max_commands: int = DEFAULT_MAX_COMMANDS
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        for name in ("min_commands", "max_commands"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise SettingsError(f"{name} must be an int")
            if v < 0 or v > MAX_COMMANDS_LIMIT:
                raise SettingsError(f"{name} must be in [0, {MAX_COMMANDS_LIMIT}]")
        if self.min_commands > self.max_commands:
            raise SettingsError("min_commands must not exceed max_commands")
        if self.log_level not in LOG_LEVELS:
            raise SettingsError(f"log_level must be one of {', '.join(LOG_LEVELS)}")


def _env(name: str) -> str | None:
    """Stripped value of ``name``; None when unset or blank."""
    value = os.environ.get(name, "").strip()
    return value or None


def _env_count(name: str, fallback: int, floor: int) -> int:
    text = _env(name)
    if text is None or not text.removeprefix("-").isdigit():
        return fallback
    return min(max(int(text), floor), MAX_COMMANDS_LIMIT)


def settings_from_env() -> StatemSettings:
    lo = _env_count("STATEM_MIN_COMMANDS", DEFAULT_MIN_COMMANDS, 0)
    hi = _env_count("STATEM_MAX_COMMANDS", max(lo, DEFAULT_MAX_COMMANDS), lo)
    level = (_env("STATEM_LOG_LEVEL") or "").upper()
    if level not in LOG_LEVELS:
        level = StatemSettings.log_level
    return StatemSettings(min_commands=lo, max_commands=hi, log_level=level)


def _require_int(obj: Any, *, name: str) -> int:
    if isinstance(obj, bool) or not isinstance(obj, int):
        raise SettingsError(f"{name} must be an int")
    return int(obj)


def load_settings(path: Path | str) -> StatemSettings:
    """Read settings from a YAML mapping; missing keys keep their defaults."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"cannot read settings file {p}: {exc}") from exc
    try:
        root = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SettingsError(f"invalid YAML in {p}: {exc}") from exc
    if root is None:
        root = {}
    if not isinstance(root, dict):
        raise SettingsError("settings must be a mapping")

    unknown = sorted(set(root) - {"min_commands", "max_commands", "log_level"})
    if unknown:
        raise SettingsError(f"unknown settings keys: {', '.join(map(str, unknown))}")

    defaults = StatemSettings()
    kwargs: dict[str, Any] = {}
    for name in ("min_commands", "max_commands"):
        if name in root:
            kwargs[name] = _require_int(root[name], name=name)
    if "log_level" in root:
        level = root["log_level"]
        if not isinstance(level, str) or not level.strip():
            raise SettingsError("log_level must be a non-empty string")
        kwargs["log_level"] = level.strip().upper()
    if "max_commands" not in kwargs and kwargs.get("min_commands", 0) > defaults.max_commands:
        kwargs["max_commands"] = kwargs["min_commands"]
    return StatemSettings(**kwargs)


def configure_logging(
    level: str | int | None = None, settings: StatemSettings | None = None
) -> logging.Logger:
    """Attach a stderr handler to the `statem` logger (idempotent).

    An explicit ``level`` wins; otherwise ``settings.log_level`` is used, and
    without ``settings`` the level comes from ``settings_from_env()``.
    """
    if level is None:
        level = (settings if settings is not None else settings_from_env()).log_level
    logger = logging.getLogger("statem")
    logger.setLevel(level)
    if not any(getattr(h, "_statem_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        handler._statem_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
