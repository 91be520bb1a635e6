"""Exceptions raised by the combat core."""

from __future__ import annotations


class GameError(Exception):
    """Base class for combat-core errors."""


class CommandError(GameError):
    """Raised when a command is executed twice or undone before it ran."""
