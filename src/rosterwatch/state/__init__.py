"""State layer.

Members and the roster that reconciles snapshots into them.  This package is
the single owner of per-member derived state.
"""

from rosterwatch.state.member import Member
from rosterwatch.state.roster import Roster

__all__ = ["Member", "Roster"]
