"""Snapshot reconciliation for one tracked team.

The roster is the only component allowed to add, remove, or update members.
Given the same sequence of snapshots and clock readings it produces the same
events and the same derived state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime

from rosterwatch._time import utcnow
from rosterwatch.config import RosterConfig
from rosterwatch.models.events import (
    BecameAlive,
    BecameDead,
    BecameIdle,
    IngestResult,
    LeaderChanged,
    MemberJoined,
    MemberLeft,
    RosterEvent,
    WentOffline,
    WentOnline,
)
from rosterwatch.models.snapshot import MemberRecord, Snapshot
from rosterwatch.state.member import Member

_logger = logging.getLogger(__name__)


class Roster:
    """Reconciled, stateful view of a team.

    Not safe for overlapping :meth:`ingest` calls on the same instance; the
    owning driver must run at most one ingest at a time.  Separate rosters
    share no state.
    """

    def __init__(
        self,
        config: RosterConfig | None = None,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._config = config or RosterConfig()
        self._clock = clock
        self._members: dict[str, Member] = {}
        self._leader_id: str | None = None
        self._all_online = False
        self._all_offline = False

    def __len__(self) -> int:
        return len(self._members)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._members

    def __iter__(self) -> Iterator[Member]:
        return iter(tuple(self._members.values()))

    @property
    def config(self) -> RosterConfig:
        return self._config

    @property
    def leader_id(self) -> str | None:
        return self._leader_id

    @property
    def all_online(self) -> bool:
        return self._all_online

    @property
    def all_offline(self) -> bool:
        return self._all_offline

    @property
    def members(self) -> tuple[Member, ...]:
        return tuple(self._members.values())

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def ingest(self, snapshot: Snapshot) -> IngestResult:
        """Reconcile *snapshot* against current membership.

        Events are ordered: leader change, joins (snapshot order), leaves
        (current membership order), then per-member transitions (snapshot
        order).
        """
        now = self._clock()
        incoming_ids = set(snapshot.member_ids())

        joined = [record for record in snapshot.members if record.id not in self._members]
        left = [member_id for member_id in self._members if member_id not in incoming_ids]
        remaining = [record for record in snapshot.members if record.id in self._members]

        events: list[RosterEvent] = []

        if snapshot.leader_id != self._leader_id:
            events.append(LeaderChanged(old_id=self._leader_id, new_id=snapshot.leader_id))
            _logger.debug("Leader changed %s -> %s", self._leader_id, snapshot.leader_id)

        for record in joined:
            self._members[record.id] = self._new_member(record)
            events.append(MemberJoined(member_id=record.id))
            _logger.debug("Member joined id=%s name=%s", record.id, record.name)

        for member_id in left:
            del self._members[member_id]
            events.append(MemberLeft(member_id=member_id))
            _logger.debug("Member left id=%s", member_id)

        for record in remaining:
            events.extend(self._update_member(self._members[record.id], record))

        self._recompute_aggregates()
        self._leader_id = snapshot.leader_id

        _logger.debug(
            "Ingested snapshot members=%d joined=%d left=%d events=%d",
            len(self._members),
            len(joined),
            len(left),
            len(events),
        )
        return IngestResult(
            events=events,
            all_online=self._all_online,
            all_offline=self._all_offline,
            observed_at=now,
        )

    def _new_member(self, record: MemberRecord) -> Member:
        return Member(record, clock=self._clock, idle_threshold=self._config.idle_threshold_delta)

    def _update_member(self, member: Member, incoming: MemberRecord) -> list[RosterEvent]:
        # Predicates must see the stored record, so classify before updating.
        member_id = member.id
        events: list[RosterEvent] = []
        if member.went_online(incoming):
            events.append(WentOnline(member_id=member_id))
        if member.went_offline(incoming):
            events.append(WentOffline(member_id=member_id))
        if member.became_alive(incoming):
            events.append(BecameAlive(member_id=member_id))
        if member.became_dead(incoming):
            events.append(BecameDead(member_id=member_id))
        if member.became_idle(incoming) and member.is_idle():
            events.append(BecameIdle(member_id=member_id))
            member.mark_idle()

        member.update(incoming)
        return events

    def _recompute_aggregates(self) -> None:
        if not self._members:
            self._all_online = False
            self._all_offline = False
            return
        self._all_online = all(member.is_online for member in self._members.values())
        self._all_offline = not any(member.is_online for member in self._members.values())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def member(self, member_id: str) -> Member | None:
        return self._members.get(member_id)

    def is_member(self, member_id: str) -> bool:
        return member_id in self._members

    def longest_alive(self) -> Member | None:
        """Member with the greatest alive duration; first one wins ties."""
        longest: Member | None = None
        for member in self._members.values():
            if longest is None or member.alive_seconds() > longest.alive_seconds():
                longest = member
        return longest

    def online_members(self) -> list[Member]:
        return [member for member in self._members.values() if member.is_online]

    def offline_members(self) -> list[Member]:
        return [member for member in self._members.values() if not member.is_online]
