"""Internal constants shared across the library."""

# A member online without moving for this long is considered idle.
DEFAULT_IDLE_THRESHOLD_SECONDS: float = 5 * 60

DEFAULT_POLL_INTERVAL_SECONDS: float = 10.0

ENV_IDLE_THRESHOLD = "ROSTERWATCH_IDLE_THRESHOLD"
ENV_POLL_INTERVAL = "ROSTERWATCH_POLL_INTERVAL"

# ------------------------------------------------------------------
# Duration formatting  (unit letter → seconds, largest first)
# ------------------------------------------------------------------

DURATION_UNITS: tuple[tuple[str, int], ...] = (
    ("d", 24 * 3600),
    ("h", 3600),
    ("m", 60),
    ("s", 1),
)
