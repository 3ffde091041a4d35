"""Clock and duration helpers shared by members and rosters."""

from __future__ import annotations

from datetime import UTC, datetime

from rosterwatch._constants import DURATION_UNITS


def utcnow() -> datetime:
    return datetime.now(UTC)


def seconds_between(now: datetime, then: datetime) -> float:
    """Elapsed seconds from *then* to *now*."""
    return (now - then).total_seconds()


def seconds_since_epoch(now: datetime, epoch_seconds: int | float) -> float:
    """Elapsed seconds from a unix timestamp to *now*."""
    return now.timestamp() - float(epoch_seconds)


def format_duration(seconds: float, ignore: str = "") -> str:
    """Render *seconds* as a compact ``"1d 2h 3m 4s"`` string.

    Zero-valued units are skipped.  Unit letters listed in *ignore* are left
    out of the output (their share is not carried into smaller units).
    Negative durations are clamped to zero.
    """
    remaining = max(0, int(seconds))
    parts: list[str] = []
    for unit, size in DURATION_UNITS:
        amount, remaining = divmod(remaining, size)
        if amount and unit not in ignore:
            parts.append(f"{amount}{unit}")
    if not parts:
        smallest = next((unit for unit, _ in reversed(DURATION_UNITS) if unit not in ignore), "s")
        return f"0{smallest}"
    return " ".join(parts)
