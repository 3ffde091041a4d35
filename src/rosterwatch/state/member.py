"""A single tracked team member.

A :class:`Member` mirrors the latest :class:`MemberRecord` for one id and
owns the bookkeeping that cannot be recovered from a single snapshot: when the
member last moved, when it went offline, and whether idleness has already been
reported for the current online session.

Transition predicates compare the stored record against an *incoming* one and
never mutate; :meth:`Member.update` is the only place derived state changes
(apart from :meth:`Member.mark_idle`, which the roster calls once it has
reported idleness).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from rosterwatch._constants import DEFAULT_IDLE_THRESHOLD_SECONDS
from rosterwatch._time import format_duration, seconds_between, seconds_since_epoch, utcnow
from rosterwatch.models.snapshot import MemberRecord


class Member:
    def __init__(
        self,
        record: MemberRecord,
        *,
        clock: Callable[[], datetime] = utcnow,
        idle_threshold: timedelta = timedelta(seconds=DEFAULT_IDLE_THRESHOLD_SECONDS),
    ) -> None:
        self._record = record
        self._clock = clock
        self._idle_threshold = idle_threshold
        self.last_movement_at: datetime | None = None
        self.went_offline_at: datetime | None = None
        self.was_idle = False

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, name={self.name!r}, online={self.is_online}, alive={self.is_alive})"

    # ------------------------------------------------------------------
    # Raw fields (latest snapshot)
    # ------------------------------------------------------------------

    @property
    def record(self) -> MemberRecord:
        return self._record

    @property
    def id(self) -> str:
        return self._record.id

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def x(self) -> float:
        return self._record.x

    @property
    def y(self) -> float:
        return self._record.y

    @property
    def is_online(self) -> bool:
        return self._record.is_online

    @property
    def is_alive(self) -> bool:
        return self._record.is_alive

    @property
    def spawn_time(self) -> int:
        return self._record.spawn_time

    @property
    def death_time(self) -> int:
        return self._record.death_time

    # ------------------------------------------------------------------
    # Field comparisons
    # ------------------------------------------------------------------

    def identity_changed(self, incoming: MemberRecord) -> bool:
        return self._record.id != incoming.id

    def name_changed(self, incoming: MemberRecord) -> bool:
        return self._record.name != incoming.name

    def x_changed(self, incoming: MemberRecord) -> bool:
        return self._record.x != incoming.x

    def y_changed(self, incoming: MemberRecord) -> bool:
        return self._record.y != incoming.y

    def online_changed(self, incoming: MemberRecord) -> bool:
        return self._record.is_online != incoming.is_online

    def spawn_time_changed(self, incoming: MemberRecord) -> bool:
        return self._record.spawn_time != incoming.spawn_time

    def alive_changed(self, incoming: MemberRecord) -> bool:
        return self._record.is_alive != incoming.is_alive

    def death_time_changed(self, incoming: MemberRecord) -> bool:
        return self._record.death_time != incoming.death_time

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def moved(self, incoming: MemberRecord) -> bool:
        return self.x_changed(incoming) or self.y_changed(incoming)

    def went_online(self, incoming: MemberRecord) -> bool:
        return not self._record.is_online and incoming.is_online

    def went_offline(self, incoming: MemberRecord) -> bool:
        return self._record.is_online and not incoming.is_online

    def became_alive(self, incoming: MemberRecord) -> bool:
        return not self._record.is_alive and incoming.is_alive

    def became_dead(self, incoming: MemberRecord) -> bool:
        # A new death timestamp is a new death even if the alive flag was
        # never observed flipping back in between.
        return (self._record.is_alive and not incoming.is_alive) or self.death_time_changed(incoming)

    def became_idle(self, incoming: MemberRecord) -> bool:
        return not self.was_idle and not self.moved(incoming) and self._record.is_online

    def is_idle(self) -> bool:
        if self.last_movement_at is None:
            return False
        return self._clock() - self.last_movement_at >= self._idle_threshold

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, incoming: MemberRecord) -> None:
        """Fold *incoming* into this member, updating derived bookkeeping."""
        now = self._clock()

        if self.went_offline(incoming):
            self.went_offline_at = now

        if self.went_online(incoming):
            self.last_movement_at = now
            self.was_idle = False
        elif self.moved(incoming) and incoming.is_online:
            self.last_movement_at = now
            self.was_idle = False
        elif not self._record.is_online:
            # TODO: decide whether idleness should survive an offline period
            # and only reset on return; for now any offline cycle clears it.
            self.was_idle = False

        self._record = incoming

    def mark_idle(self) -> None:
        """Record that idleness has been reported for this online session."""
        self.was_idle = True

    # ------------------------------------------------------------------
    # Derived durations (seconds)
    # ------------------------------------------------------------------

    def alive_seconds(self) -> float:
        if self._record.spawn_time == 0:
            return 0.0
        return seconds_since_epoch(self._clock(), self._record.spawn_time)

    def dead_seconds(self) -> float:
        if self._record.death_time == 0:
            return 0.0
        return seconds_since_epoch(self._clock(), self._record.death_time)

    def offline_seconds(self) -> float | None:
        if self.went_offline_at is None:
            return None
        return seconds_between(self._clock(), self.went_offline_at)

    def idle_seconds(self) -> float:
        if self.last_movement_at is None:
            return 0.0
        return seconds_between(self._clock(), self.last_movement_at)

    def alive_time(self, ignore: str = "") -> str:
        return format_duration(self.alive_seconds(), ignore)

    def dead_time(self, ignore: str = "") -> str:
        return format_duration(self.dead_seconds(), ignore)

    def idle_time(self, ignore: str = "") -> str:
        return format_duration(self.idle_seconds(), ignore)

    def offline_time(self, ignore: str = "") -> str | None:
        seconds = self.offline_seconds()
        if seconds is None:
            return None
        return format_duration(seconds, ignore)
