"""Time utilities shared by the repositories and the aggregator."""

import time
from datetime import UTC, datetime


def now_ts() -> int:
    """Return the current time as whole unix seconds."""
    return int(time.time())


def hour_label(timestamp: int) -> str:
    """Format a unix timestamp as its UTC hour, e.g. ``2024-01-15T12``."""
    return datetime.fromtimestamp(timestamp, UTC).strftime("%Y-%m-%dT%H")
