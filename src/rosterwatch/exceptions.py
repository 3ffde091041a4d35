"""Custom exception hierarchy for rosterwatch."""

from __future__ import annotations

from typing import Any


class RosterError(Exception):
    """Base exception for all rosterwatch errors."""


class RosterConfigError(RosterError):
    """Invalid or missing configuration."""


class RosterSnapshotError(RosterError):
    """A snapshot payload could not be turned into a :class:`Snapshot`.

    ``errors`` carries the structured validation errors reported by
    pydantic so callers can log or inspect which fields were rejected.
    """

    def __init__(self, message: str, *, errors: list[Any] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)
