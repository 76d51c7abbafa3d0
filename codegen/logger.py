"""Leveled console logger.

Thin wrapper over a Rich ``Console`` that filters messages by level.  The
same instance is handed to the registry, composer and generator so that a
single ``log_level`` setting controls all scaffolding output.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

LEVELS: dict[str, int] = {
    "error": 0,
    "warn": 1,
    "info": 2,
    "debug": 3,
}

_ALIASES: dict[str, str] = {"warning": "warn"}


def normalize_level(level: str) -> str:
    """Return the canonical level name, raising ``ValueError`` if unknown."""
    key = _ALIASES.get(level.lower(), level.lower())
    if key not in LEVELS:
        raise ValueError(f"Unknown log level: {level!r} (expected one of {', '.join(LEVELS)})")
    return key


class Logger:
    """Console logger with ``error < warn < info < debug`` filtering."""

    def __init__(self, level: str = "info", console: Console | None = None) -> None:
        self.level = normalize_level(level)
        self.console = console or Console(stderr=True)

    def set_level(self, level: str) -> None:
        self.level = normalize_level(level)

    def should_log(self, level: str) -> bool:
        return LEVELS[level] <= LEVELS[self.level]

    def _emit(self, level: str, style: str, prefix: str, message: str) -> None:
        if self.should_log(level):
            self.console.print(f"[{style}]{prefix} {escape(message)}[/{style}]")

    def error(self, message: str) -> None:
        self._emit("error", "bold red", "x", message)

    def warning(self, message: str) -> None:
        self._emit("warn", "bold yellow", "!", message)

    warn = warning

    def info(self, message: str) -> None:
        self._emit("info", "blue", "i", message)

    def success(self, message: str) -> None:
        self._emit("info", "bold green", "+", message)

    def debug(self, message: str) -> None:
        self._emit("debug", "dim", "-", message)
