"""Roster configuration for rosterwatch."""

from __future__ import annotations

import dataclasses
import math
import os
from datetime import timedelta
from typing import Any

from rosterwatch._constants import (
    DEFAULT_IDLE_THRESHOLD_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    ENV_IDLE_THRESHOLD,
    ENV_POLL_INTERVAL,
)
from rosterwatch.exceptions import RosterConfigError


def _env_seconds(env_key: str, value: str) -> float:
    try:
        return float(value.strip())
    except ValueError as exc:
        raise RosterConfigError(f"{env_key} must be a number of seconds, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RosterConfig:
    """Roster configuration.

    Parameters
    ----------
    idle_threshold : float
        Seconds a member must stay online without moving before it is
        considered idle.  Defaults to 5 minutes.
    poll_interval : float
        Seconds between snapshot fetches when a :class:`RosterPoller`
        drives the roster.
    """

    idle_threshold: float = DEFAULT_IDLE_THRESHOLD_SECONDS
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS

    def __post_init__(self) -> None:
        for field_name in ("idle_threshold", "poll_interval"):
            value = getattr(self, field_name)
            if not math.isfinite(value) or value <= 0:
                raise RosterConfigError(f"{field_name} must be a positive finite number, got {value}")

    @property
    def idle_threshold_delta(self) -> timedelta:
        return timedelta(seconds=self.idle_threshold)

    @classmethod
    def from_env(cls, **overrides: Any) -> RosterConfig:
        """Create configuration from environment variables.

        Reads ``ROSTERWATCH_IDLE_THRESHOLD`` and ``ROSTERWATCH_POLL_INTERVAL``
        (both in seconds).  Explicit keyword arguments override environment
        values.

        Raises
        ------
        RosterConfigError
            If a variable is set but is not a positive number.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            ENV_IDLE_THRESHOLD: "idle_threshold",
            ENV_POLL_INTERVAL: "poll_interval",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_seconds(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
