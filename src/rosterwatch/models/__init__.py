"""Input and event models for rosterwatch."""

from rosterwatch.models._base import RosterBaseModel
from rosterwatch.models.events import (
    BecameAlive,
    BecameDead,
    BecameIdle,
    IngestResult,
    LeaderChanged,
    MemberJoined,
    MemberLeft,
    RosterEvent,
    RosterEventKind,
    WentOffline,
    WentOnline,
)
from rosterwatch.models.snapshot import MemberRecord, Snapshot

__all__ = [
    "BecameAlive",
    "BecameDead",
    "BecameIdle",
    "IngestResult",
    "LeaderChanged",
    "MemberJoined",
    "MemberLeft",
    "MemberRecord",
    "RosterBaseModel",
    "RosterEvent",
    "RosterEventKind",
    "Snapshot",
    "WentOffline",
    "WentOnline",
]
