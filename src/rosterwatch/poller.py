"""Async polling driver for a :class:`Roster`.

The roster itself does no I/O and does not serialise concurrent ingests.  The
poller owns both: it awaits the host-supplied ``fetch`` coroutine, ingests the
result under a lock so at most one ingest is in flight, and fans the events out
to listeners.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable, Iterable

from rosterwatch.models.events import IngestResult, RosterEvent
from rosterwatch.models.snapshot import Snapshot
from rosterwatch.state.roster import Roster

_logger = logging.getLogger(__name__)

SnapshotFetcher = Callable[[], Awaitable[Snapshot]]
EventListener = Callable[[RosterEvent], None]


class RosterPoller:
    """Periodically fetch snapshots and feed them to a roster.

    Usage::

        poller = RosterPoller(roster, fetch_team, listeners=[colors.handle])
        poller.start()
        ...
        await poller.stop()
    """

    def __init__(
        self,
        roster: Roster,
        fetch: SnapshotFetcher,
        *,
        interval: float | None = None,
        listeners: Iterable[EventListener] = (),
    ) -> None:
        self._roster = roster
        self._fetch = fetch
        self._interval = interval if interval is not None else roster.config.poll_interval
        self._listeners: list[EventListener] = list(listeners)
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None

    @property
    def roster(self) -> Roster:
        return self._roster

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    async def poll_once(self) -> IngestResult | None:
        """Fetch, ingest and dispatch one snapshot.

        Overlapping calls run one after another, so snapshots are ingested in
        the order they were fetched.  Returns ``None`` when the fetch failed;
        the failure is logged and the roster is left untouched.
        """
        async with self._lock:
            try:
                snapshot = await self._fetch()
            except Exception:
                _logger.warning("Snapshot fetch failed; skipping this cycle", exc_info=True)
                return None

            result = self._roster.ingest(snapshot)
            self._dispatch(result)
        return result

    def _dispatch(self, result: IngestResult) -> None:
        for event in result.events:
            for listener in self._listeners:
                try:
                    listener(event)
                except Exception:
                    _logger.debug("Roster event listener failed for %s", event.kind, exc_info=True)

    async def _run(self) -> None:
        _logger.debug("Roster polling started interval=%s", self._interval)
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        """Start the polling loop on the running event loop."""
        if self.is_running:
            return
        previous = self._task
        if previous is not None and not previous.cancelled() and previous.exception() is not None:
            _logger.error("Previous roster polling task failed", exc_info=previous.exception())
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel the polling loop and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.debug("Roster polling stopped")
