"""Human-readable rendering of instance values."""

import math
import time
from typing import Any, Optional

from ccdash.services.values import CounterSeries, KeyKind, classify_key, to_field_value

NOT_AVAILABLE = "N/A"
MINUTES_PER_DAY = 1440


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def render_uptime(started: Any, now: Optional[float] = None) -> Any:
    """Render a process start timestamp as elapsed time."""
    if now is None:
        now = time.time()
    try:
        minutes = (now - float(started)) / 60
    except (TypeError, ValueError):
        return started

    if minutes < 1:
        return "Just now"
    if minutes > MINUTES_PER_DAY:
        return f"{_round_half_up(minutes / MINUTES_PER_DAY)} days"
    return f"{_round_half_up(minutes)} min"


def render(key: str, value: Any, now: Optional[float] = None) -> Any:
    """Render an instance value for display.

    Counter series show their latest sample, ``started`` shows uptime, and
    everything else passes through unchanged.
    """
    kind = classify_key(key)
    if kind is KeyKind.COUNTER:
        series: CounterSeries = to_field_value(key, value)
        if not series.samples:
            return NOT_AVAILABLE
        return str(series.last)
    if kind is KeyKind.STARTED:
        return render_uptime(value, now)
    return value
