"""Events produced by :meth:`rosterwatch.state.roster.Roster.ingest`.

Collaborators (notifiers, colour assignment) react to these; the roster only
reports *what* changed, never how to announce it.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field

from rosterwatch.models._base import RosterBaseModel


class RosterEventKind(StrEnum):
    MEMBER_JOINED = "member_joined"
    MEMBER_LEFT = "member_left"
    WENT_ONLINE = "went_online"
    WENT_OFFLINE = "went_offline"
    BECAME_ALIVE = "became_alive"
    BECAME_DEAD = "became_dead"
    BECAME_IDLE = "became_idle"
    LEADER_CHANGED = "leader_changed"


class MemberJoined(RosterBaseModel):
    kind: Literal[RosterEventKind.MEMBER_JOINED] = RosterEventKind.MEMBER_JOINED
    member_id: str


class MemberLeft(RosterBaseModel):
    kind: Literal[RosterEventKind.MEMBER_LEFT] = RosterEventKind.MEMBER_LEFT
    member_id: str


class WentOnline(RosterBaseModel):
    kind: Literal[RosterEventKind.WENT_ONLINE] = RosterEventKind.WENT_ONLINE
    member_id: str


class WentOffline(RosterBaseModel):
    kind: Literal[RosterEventKind.WENT_OFFLINE] = RosterEventKind.WENT_OFFLINE
    member_id: str


class BecameAlive(RosterBaseModel):
    kind: Literal[RosterEventKind.BECAME_ALIVE] = RosterEventKind.BECAME_ALIVE
    member_id: str


class BecameDead(RosterBaseModel):
    kind: Literal[RosterEventKind.BECAME_DEAD] = RosterEventKind.BECAME_DEAD
    member_id: str


class BecameIdle(RosterBaseModel):
    kind: Literal[RosterEventKind.BECAME_IDLE] = RosterEventKind.BECAME_IDLE
    member_id: str


class LeaderChanged(RosterBaseModel):
    kind: Literal[RosterEventKind.LEADER_CHANGED] = RosterEventKind.LEADER_CHANGED
    old_id: str | None = None
    new_id: str | None = None


RosterEvent = Annotated[
    MemberJoined | MemberLeft | WentOnline | WentOffline | BecameAlive | BecameDead | BecameIdle | LeaderChanged,
    Field(discriminator="kind"),
]
"""Any event emitted by a roster, discriminated on ``kind``."""


class IngestResult(RosterBaseModel):
    """Outcome of one ``ingest`` call.

    Parameters
    ----------
    events : list
        Events in emission order: leader change, joins, leaves, then
        per-member transitions.
    all_online : bool
        Every member is online (``False`` for an empty roster).
    all_offline : bool
        Every member is offline (``False`` for an empty roster).
    observed_at : datetime
        Clock reading used for every derived timestamp in this ingest.
    """

    events: list[RosterEvent] = Field(default_factory=list)
    all_online: bool = False
    all_offline: bool = False
    observed_at: datetime

    def of_kind(self, kind: RosterEventKind) -> list[RosterEvent]:
        return [event for event in self.events if event.kind == kind]
