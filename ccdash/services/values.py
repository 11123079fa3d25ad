"""Instance key classification and the FieldValue variant.

Instance records mix scalars and counter series under one mapping; the
kind of a value is decided by its key prefix, never by inspecting the value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

COUNTER_PREFIX = "c_"
INFO_PREFIX = "k_"
TIMESTAMP_KEY = "ts"
VERSION_KEY = "v"
STARTED_KEY = "started"


class KeyKind(str, Enum):
    COUNTER = "counter"
    INFO = "info"
    TIMESTAMP = "timestamp"
    VERSION = "version"
    STARTED = "started"
    PLAIN = "plain"


def classify_key(key: str) -> KeyKind:
    """Map a raw instance key to its kind."""
    if key == TIMESTAMP_KEY:
        return KeyKind.TIMESTAMP
    if key == VERSION_KEY:
        return KeyKind.VERSION
    if key == STARTED_KEY:
        return KeyKind.STARTED
    if key.startswith(COUNTER_PREFIX):
        return KeyKind.COUNTER
    if key.startswith(INFO_PREFIX):
        return KeyKind.INFO
    return KeyKind.PLAIN


def display_label(key: str) -> str:
    """Strip the ``c_`` / ``k_`` namespace from a key."""
    if key.startswith(COUNTER_PREFIX) or key.startswith(INFO_PREFIX):
        return key[2:]
    return key


@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class CounterSeries:
    samples: tuple

    @property
    def last(self) -> Any:
        return self.samples[-1] if self.samples else None


FieldValue = Union[Scalar, CounterSeries]


def to_field_value(key: str, raw: Any) -> FieldValue:
    """Wrap a raw instance value according to its key."""
    if classify_key(key) is KeyKind.COUNTER:
        if raw is None:
            return CounterSeries(())
        if isinstance(raw, (list, tuple)):
            return CounterSeries(tuple(raw))
        # A bare scalar under a counter key is a single-sample series
        return CounterSeries((raw,))
    return Scalar(raw)


def parse_sample(sample: Any) -> int:
    """Parse one counter sample, degrading to 0 on anything non-numeric."""
    if sample is None or isinstance(sample, bool):
        return 0
    try:
        return int(sample)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(sample))
    except (TypeError, ValueError, OverflowError):
        return 0
