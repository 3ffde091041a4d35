"""Per-member display colour assignment.

Colours are cosmetic and persisted by the host; this registry only guarantees
that a member gets a colour the first time it joins and keeps it forever after,
including across leave/rejoin cycles.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable, MutableMapping

from rosterwatch.models.events import MemberJoined, RosterEvent

_logger = logging.getLogger(__name__)


def random_color() -> str:
    """Return a random ``#RRGGBB`` colour."""
    return f"#{secrets.token_hex(3).upper()}"


class ColorRegistry:
    """Assigns a colour to each member id exactly once.

    Parameters
    ----------
    store : MutableMapping[str, str] or None
        Backing mapping of member id to colour.  Pass the host's persisted
        mapping to keep assignments across restarts.
    generator : callable
        Produces a new colour; defaults to :func:`random_color`.
    """

    def __init__(
        self,
        store: MutableMapping[str, str] | None = None,
        *,
        generator: Callable[[], str] = random_color,
    ) -> None:
        self._store: MutableMapping[str, str] = store if store is not None else {}
        self._generator = generator

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._store

    def color_of(self, member_id: str) -> str | None:
        return self._store.get(member_id)

    def assign(self, member_id: str) -> str:
        """Return the member's colour, picking one only if none exists yet."""
        existing = self._store.get(member_id)
        if existing is not None:
            return existing
        color = self._generator()
        self._store[member_id] = color
        _logger.debug("Assigned colour %s to member id=%s", color, member_id)
        return color

    def handle(self, event: RosterEvent) -> None:
        """Event listener: assign on :class:`MemberJoined`, ignore the rest."""
        if isinstance(event, MemberJoined):
            self.assign(event.member_id)
