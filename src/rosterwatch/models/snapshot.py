"""Snapshot input types.

A :class:`Snapshot` is a full point-in-time listing of a team as reported by
the upstream source.  Malformed payloads are rejected here, at construction,
so the roster only ever sees well-formed records.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator, model_validator

from rosterwatch.exceptions import RosterSnapshotError
from rosterwatch.models._base import RosterBaseModel, coerce_identifier


class MemberRecord(RosterBaseModel):
    """Raw state of one team member as listed in a snapshot.

    Parameters
    ----------
    id : str
        Stable member identifier.
    name : str
        Display name.
    x, y : float
        World coordinates.
    is_online : bool
        Whether the member is currently connected.
    is_alive : bool
        Whether the member is currently alive.
    spawn_time : int
        Unix seconds of the last spawn, ``0`` if never spawned.
    death_time : int
        Unix seconds of the last death, ``0`` if never died.
    """

    id: str = Field(..., validation_alias=AliasChoices("id", "steamId", "steam_id", "memberId", "member_id"))
    name: str = ""
    x: float = Field(default=0.0, allow_inf_nan=False)
    y: float = Field(default=0.0, allow_inf_nan=False)
    is_online: bool = False
    is_alive: bool = False
    spawn_time: int = Field(default=0, ge=0)
    death_time: int = Field(default=0, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> Any:
        return coerce_identifier(value)

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value:
            raise ValueError("member id must be non-empty")
        return value


class Snapshot(RosterBaseModel):
    """A full listing of a team: its leader and its members, in upstream order."""

    leader_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("leaderId", "leader_id", "leaderSteamId", "leader_steam_id"),
    )
    members: list[MemberRecord] = Field(default_factory=list)

    @field_validator("leader_id", mode="before")
    @classmethod
    def _normalize_leader(cls, value: Any) -> Any:
        value = coerce_identifier(value)
        # Upstream reports "no leader" as 0 or an empty id.
        if value in ("", "0"):
            return None
        return value

    @model_validator(mode="after")
    def _reject_duplicate_members(self) -> Snapshot:
        seen: set[str] = set()
        for record in self.members:
            if record.id in seen:
                raise ValueError(f"member {record.id!r} listed more than once")
            seen.add(record.id)
        return self

    def member_ids(self) -> list[str]:
        return [record.id for record in self.members]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Snapshot:
        """Validate an upstream payload.

        Raises
        ------
        RosterSnapshotError
            If the payload is not a well-formed snapshot.
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise RosterSnapshotError(f"invalid team snapshot: {exc.error_count()} error(s)", errors=exc.errors()) from exc
