"""rosterwatch - Presence and state-diffing engine for polled team rosters."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("rosterwatch")
except PackageNotFoundError:
    __version__ = "0+local"
from rosterwatch._time import format_duration
from rosterwatch.colors import ColorRegistry
from rosterwatch.config import RosterConfig
from rosterwatch.exceptions import RosterConfigError, RosterError, RosterSnapshotError
from rosterwatch.models import (
    BecameAlive,
    BecameDead,
    BecameIdle,
    IngestResult,
    LeaderChanged,
    MemberJoined,
    MemberLeft,
    MemberRecord,
    RosterEvent,
    RosterEventKind,
    Snapshot,
    WentOffline,
    WentOnline,
)
from rosterwatch.poller import RosterPoller
from rosterwatch.state import Member, Roster

__all__ = [
    "__version__",
    "BecameAlive",
    "BecameDead",
    "BecameIdle",
    "ColorRegistry",
    "IngestResult",
    "LeaderChanged",
    "Member",
    "MemberJoined",
    "MemberLeft",
    "MemberRecord",
    "Roster",
    "RosterConfig",
    "RosterConfigError",
    "RosterError",
    "RosterEvent",
    "RosterEventKind",
    "RosterPoller",
    "RosterSnapshotError",
    "Snapshot",
    "WentOffline",
    "WentOnline",
    "format_duration",
]
