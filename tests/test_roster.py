from __future__ import annotations

from datetime import timedelta

import pytest
from tests._helpers import START, START_EPOCH, FakeClock

from rosterwatch.config import RosterConfig
from rosterwatch.models.events import (
    BecameAlive,
    BecameDead,
    BecameIdle,
    LeaderChanged,
    MemberJoined,
    MemberLeft,
    RosterEventKind,
    WentOffline,
    WentOnline,
)
from rosterwatch.models.snapshot import MemberRecord, Snapshot
from rosterwatch.state.roster import Roster

IDLE_THRESHOLD = 60.0


def _record(member_id: str, **overrides: object) -> MemberRecord:
    fields: dict[str, object] = {
        "id": member_id,
        "name": member_id.lower(),
        "x": 0.0,
        "y": 0.0,
        "is_online": True,
        "is_alive": True,
        "spawn_time": START_EPOCH - 100,
        "death_time": 0,
    }
    fields.update(overrides)
    return MemberRecord(**fields)


def _snapshot(*records: MemberRecord, leader_id: str | None = "A") -> Snapshot:
    return Snapshot(leader_id=leader_id, members=list(records))


@pytest.fixture
def roster(clock: FakeClock) -> Roster:
    return Roster(RosterConfig(idle_threshold=IDLE_THRESHOLD), clock=clock)


def test_concrete_join_then_offline_scenario(roster: Roster, clock: FakeClock) -> None:
    result = roster.ingest(_snapshot(MemberRecord(id="A", is_online=True, is_alive=True, spawn_time=1000)))

    assert MemberJoined(member_id="A") in result.events
    assert result.all_online is True
    assert result.all_offline is False
    assert roster.all_online is True
    longest = roster.longest_alive()
    assert longest is not None
    assert longest.id == "A"

    result = roster.ingest(_snapshot(MemberRecord(id="A", is_online=False, is_alive=True, spawn_time=1000)))
    assert result.events == [WentOffline(member_id="A")]
    assert result.all_online is False
    assert result.all_offline is True

    clock.advance(5)
    member = roster.member("A")
    assert member is not None
    offline = member.offline_seconds()
    assert offline is not None and offline > 0


def test_first_ingest_reports_leader(roster: Roster) -> None:
    result = roster.ingest(_snapshot(_record("A")))
    assert result.events[0] == LeaderChanged(old_id=None, new_id="A")
    assert roster.leader_id == "A"


def test_membership_round_trip(roster: Roster) -> None:
    roster.ingest(_snapshot(_record("A")))
    result = roster.ingest(_snapshot(_record("A"), _record("B")))

    assert result.of_kind(RosterEventKind.MEMBER_JOINED) == [MemberJoined(member_id="B")]
    assert roster.is_member("B")
    assert "B" in roster
    assert len(roster) == 2


def test_leave(roster: Roster) -> None:
    roster.ingest(_snapshot(_record("A"), _record("B")))
    result = roster.ingest(_snapshot(_record("A")))

    assert result.of_kind(RosterEventKind.MEMBER_LEFT) == [MemberLeft(member_id="B")]
    assert not roster.is_member("B")
    assert roster.member("B") is None


def test_rejoin_creates_fresh_member(roster: Roster, clock: FakeClock) -> None:
    roster.ingest(_snapshot(_record("A"), _record("B", is_online=False)))
    roster.ingest(_snapshot(_record("A"), _record("B")))
    first = roster.member("B")
    assert first is not None and first.last_movement_at is not None

    roster.ingest(_snapshot(_record("A")))
    result = roster.ingest(_snapshot(_record("A"), _record("B")))

    rejoined = roster.member("B")
    assert rejoined is not None
    assert rejoined is not first
    assert rejoined.last_movement_at is None
    assert MemberJoined(member_id="B") in result.events


def test_identical_snapshot_is_idempotent(roster: Roster) -> None:
    snapshot = _snapshot(_record("A"), _record("B", is_online=False, is_alive=False, death_time=START_EPOCH - 5))
    roster.ingest(snapshot)
    result = roster.ingest(snapshot)
    assert result.events == []


def test_event_order(roster: Roster) -> None:
    roster.ingest(_snapshot(_record("A"), _record("B"), _record("C", is_online=False)))
    result = roster.ingest(
        _snapshot(
            _record("C"),
            _record("D"),
            _record("A", is_online=False),
            _record("E"),
            leader_id="C",
        )
    )

    kinds = [event.kind for event in result.events]
    assert kinds == [
        RosterEventKind.LEADER_CHANGED,
        RosterEventKind.MEMBER_JOINED,
        RosterEventKind.MEMBER_JOINED,
        RosterEventKind.MEMBER_LEFT,
        RosterEventKind.WENT_ONLINE,
        RosterEventKind.WENT_OFFLINE,
    ]
    assert result.events[0] == LeaderChanged(old_id="A", new_id="C")
    assert result.events[1:3] == [MemberJoined(member_id="D"), MemberJoined(member_id="E")]
    assert result.events[3] == MemberLeft(member_id="B")
    assert result.events[4:] == [WentOnline(member_id="C"), WentOffline(member_id="A")]


def test_idle_reported_once(roster: Roster, clock: FakeClock) -> None:
    roster.ingest(_snapshot(_record("A", is_online=False)))
    roster.ingest(_snapshot(_record("A")))

    clock.advance(IDLE_THRESHOLD - 1)
    assert roster.ingest(_snapshot(_record("A"))).events == []

    clock.advance(1)
    member = roster.member("A")
    assert member is not None
    assert member.idle_seconds() >= IDLE_THRESHOLD
    assert roster.ingest(_snapshot(_record("A"))).events == [BecameIdle(member_id="A")]
    assert member.was_idle is True

    clock.advance(IDLE_THRESHOLD)
    assert roster.ingest(_snapshot(_record("A"))).events == []


def test_idle_rearms_after_movement(roster: Roster, clock: FakeClock) -> None:
    roster.ingest(_snapshot(_record("A", is_online=False)))
    roster.ingest(_snapshot(_record("A")))
    clock.advance(IDLE_THRESHOLD)
    assert roster.ingest(_snapshot(_record("A"))).events == [BecameIdle(member_id="A")]

    assert roster.ingest(_snapshot(_record("A", x=5.0))).events == []
    clock.advance(IDLE_THRESHOLD)
    assert roster.ingest(_snapshot(_record("A", x=5.0))).events == [BecameIdle(member_id="A")]


def test_death_retrigger_without_alive_flip(roster: Roster) -> None:
    roster.ingest(_snapshot(_record("A", death_time=START_EPOCH - 300)))
    result = roster.ingest(_snapshot(_record("A", death_time=START_EPOCH - 10)))
    assert result.events == [BecameDead(member_id="A")]


def test_alive_transitions(roster: Roster) -> None:
    roster.ingest(_snapshot(_record("A")))
    died = roster.ingest(_snapshot(_record("A", is_alive=False, death_time=START_EPOCH)))
    assert died.events == [BecameDead(member_id="A")]

    respawned = roster.ingest(_snapshot(_record("A", death_time=START_EPOCH, spawn_time=START_EPOCH)))
    assert respawned.events == [BecameAlive(member_id="A")]


def test_aggregates(roster: Roster) -> None:
    empty = roster.ingest(_snapshot(leader_id=None))
    assert (empty.all_online, empty.all_offline) == (False, False)

    mixed = roster.ingest(_snapshot(_record("A"), _record("B", is_online=False)))
    assert (mixed.all_online, mixed.all_offline) == (False, False)
    assert [member.id for member in roster.online_members()] == ["A"]
    assert [member.id for member in roster.offline_members()] == ["B"]

    offline = roster.ingest(_snapshot(_record("A", is_online=False), _record("B", is_online=False)))
    assert (offline.all_online, offline.all_offline) == (False, True)

    emptied = roster.ingest(_snapshot(leader_id=None))
    assert (emptied.all_online, emptied.all_offline) == (False, False)
    assert roster.members == ()


def test_longest_alive(roster: Roster) -> None:
    assert roster.longest_alive() is None

    roster.ingest(
        _snapshot(
            _record("A", spawn_time=START_EPOCH - 10),
            _record("B", spawn_time=START_EPOCH - 500),
            _record("C", spawn_time=START_EPOCH - 500),
        )
    )
    longest = roster.longest_alive()
    assert longest is not None
    assert longest.id == "B"


def test_observed_at_uses_clock(roster: Roster, clock: FakeClock) -> None:
    clock.advance(42)
    result = roster.ingest(_snapshot(_record("A")))
    assert result.observed_at == START + timedelta(seconds=42)


def test_rosters_are_independent(clock: FakeClock) -> None:
    first = Roster(clock=clock)
    second = Roster(clock=clock)
    first.ingest(_snapshot(_record("A")))
    assert not second.is_member("A")
    assert second.leader_id is None
