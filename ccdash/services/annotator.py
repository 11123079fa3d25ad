"""Instance annotator — health tags, table headers and counter totals."""

import time
from typing import Any, Optional

from ccdash.config import settings
from ccdash.models.schemas import InstanceTag
from ccdash.services.counters import add_counter
from ccdash.services.state import ViewState
from ccdash.services.values import KeyKind, classify_key, display_label, to_field_value

EXPIRED_TAG = "Expired timestamp"
OK_TAG = "Ok"


def _is_expired(ts: Any, now: float, window: int) -> bool:
    if ts is None:
        return True
    try:
        return float(ts) < now - window
    except (TypeError, ValueError):
        return False


def tag_instance(
    record: dict[str, Any],
    current_version: Any,
    headers: dict[str, str],
    totals: dict[str, int],
    now: float,
    expired_after: int,
) -> list[InstanceTag]:
    """Annotate one instance record.

    Registers every non-status key in ``headers`` and feeds ``c_`` keys into
    ``totals``. Returns the instance's tags, ``Ok`` when nothing was flagged.
    """
    tags: list[InstanceTag] = []
    for key, raw in record.items():
        kind = classify_key(key)
        if kind is KeyKind.TIMESTAMP:
            if _is_expired(raw, now, expired_after):
                tags.append(InstanceTag(text=EXPIRED_TAG, type="warning"))
            continue
        if kind is KeyKind.VERSION:
            if str(raw) != str(current_version):
                tags.append(InstanceTag(text=f"Old version ( v.{raw} )", type="danger"))
            continue

        headers[key] = display_label(key)
        if kind is KeyKind.COUNTER:
            add_counter(totals, key, to_field_value(key, raw))

    if not tags:
        tags.append(InstanceTag(text=OK_TAG, type="success"))
    return tags


def annotate_instances(
    state: ViewState,
    clients: dict[str, dict[str, Any]],
    now: Optional[float] = None,
    expired_after: Optional[int] = None,
) -> ViewState:
    """Rebuild tags and totals for ``clients`` on ``state``.

    Headers accumulate: keys seen in earlier refreshes stay in the table.
    """
    if now is None:
        now = time.time()
    if expired_after is None:
        expired_after = settings.expired_after_seconds

    state.instances = clients
    state.instance_totals = {}
    state.instance_tags = {}
    for instance_id, record in clients.items():
        state.instance_tags[instance_id] = tag_instance(
            record,
            state.current_version,
            state.instance_headers,
            state.instance_totals,
            now,
            expired_after,
        )
    return state
