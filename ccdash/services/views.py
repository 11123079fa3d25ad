"""Assemble the dashboard view from the current state."""

import time
from typing import Optional

from ccdash.models.schemas import DashboardView, FieldView, InstanceView
from ccdash.services.formatter import render
from ccdash.services.state import VERSION_FIELD, ViewState


def build_view(state: ViewState, now: Optional[float] = None) -> DashboardView:
    """Render ``state`` into the shape the dashboard page consumes.

    Every instance row carries a value for every accumulated header so the
    table stays rectangular; keys an instance did not report render as
    their formatter's empty form.
    """
    if now is None:
        now = time.time()

    fields = [
        FieldView(
            key=key,
            title=f.title,
            type=f.type,
            description=f.description,
            default=f.default,
            value=f.value,
            value_orig=f.value_orig,
            dirty=f.dirty,
            read_only=key == VERSION_FIELD,
        )
        for key, f in (state.service_data or {}).items()
    ]

    instances = [
        InstanceView(
            id=instance_id,
            tags=state.instance_tags.get(instance_id, []),
            values={
                key: render(key, record.get(key), now)
                for key in state.instance_headers
            },
        )
        for instance_id, record in state.instances.items()
    ]

    return DashboardView(
        services=state.services,
        selected_service=state.selected_service,
        loading=state.loading,
        info=state.info,
        fields=fields,
        instance_headers=state.instance_headers,
        instances=instances,
        instance_totals=state.instance_totals,
    )
