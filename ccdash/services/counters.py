"""Counter aggregation across client instances."""

from typing import Any, Iterable

from ccdash.services.values import (
    CounterSeries,
    KeyKind,
    classify_key,
    display_label,
    parse_sample,
    to_field_value,
)

RATE_SUFFIX = " 1/min"


def counter_label(key: str) -> str:
    """``c_hits`` -> ``hits 1/min``."""
    return display_label(key) + RATE_SUFFIX


def last_sample(series: CounterSeries) -> int:
    """Latest sample of a series as an int; missing or garbage counts as 0."""
    return parse_sample(series.last)


def add_counter(totals: dict[str, int], key: str, series: CounterSeries):
    """Add the latest sample of ``series`` to its running total."""
    label = counter_label(key)
    totals[label] = totals.get(label, 0) + last_sample(series)


def aggregate_counters(clients: Iterable[dict[str, Any]]) -> dict[str, int]:
    """Sum the latest sample of every ``c_`` key over ``clients``."""
    totals: dict[str, int] = {}
    for record in clients:
        for key, raw in record.items():
            if classify_key(key) is KeyKind.COUNTER:
                add_counter(totals, key, to_field_value(key, raw))
    return totals
