"""Refresh orchestrator — polls the selected service and rebuilds the view.

Idle until a service is selected; from then on a scheduler job re-fetches
the service every ``refresh_interval_seconds``. Selecting another service
resets the derived state and restarts the cycle.
"""

import logging
import time
from typing import Any, Optional

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.base import BaseScheduler

from ccdash.config import settings
from ccdash.models.schemas import FieldDefinition, ServicePayload
from ccdash.services.annotator import annotate_instances
from ccdash.services.backend import BackendClient, BackendError
from ccdash.services.merger import merge_fields
from ccdash.services.state import VERSION_FIELD, ViewState

logger = logging.getLogger(__name__)

REFRESH_JOB_ID = "refresh_service"


class UnknownField(LookupError):
    """No such field on the selected service (or nothing is selected)."""


class RefreshOrchestrator:
    def __init__(
        self,
        backend: BackendClient,
        scheduler: Optional[BaseScheduler] = None,
        interval_seconds: Optional[int] = None,
        state: Optional[ViewState] = None,
    ):
        self.backend = backend
        self.scheduler = scheduler
        self.interval_seconds = interval_seconds or settings.refresh_interval_seconds
        self.state = state or ViewState()
        self._in_flight: set[str] = set()

    @property
    def polling(self) -> bool:
        return self.state.selected_service is not None

    # ── Service list ─────────────────────────────────────────────

    async def load_services(self) -> list[str]:
        """Fetch the service list; keeps the previous list on failure."""
        try:
            self.state.services = await self.backend.list_services()
        except BackendError:
            logger.warning("[REFRESH] service list unavailable, keeping %d known", len(self.state.services))
        return self.state.services

    # ── Selection & polling ──────────────────────────────────────

    async def select_service(self, service: str) -> ViewState:
        """Reset all derived state for ``service`` and refresh it right away."""
        logger.info("[REFRESH] selected service %s", service)
        self.state.select(service)
        self._schedule()
        await self.refresh()
        return self.state

    def _schedule(self):
        if self.scheduler is None:
            return
        self.scheduler.add_job(
            self.refresh,
            "interval",
            seconds=self.interval_seconds,
            id=REFRESH_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )

    def stop(self):
        """Remove the polling job, if any."""
        if self.scheduler is None:
            return
        try:
            self.scheduler.remove_job(REFRESH_JOB_ID)
        except JobLookupError:
            pass

    async def refresh(self) -> bool:
        """Fetch the selected service and fold it into the view.

        At most one fetch per service is in flight; an overlapping call is
        skipped. A response for a service that is no longer selected is
        dropped. Returns True when new data was applied.
        """
        service = self.state.selected_service
        if service is None:
            return False
        if service in self._in_flight:
            logger.debug("[REFRESH] %s already in flight, skipping tick", service)
            return False

        self._in_flight.add(service)
        self.state.loading = True
        try:
            payload = await self.backend.get_service(service)
        except BackendError:
            logger.warning("[REFRESH] %s unavailable, keeping last view", service)
            return False
        finally:
            self._in_flight.discard(service)
            if self.state.selected_service == service:
                self.state.loading = False

        if self.state.selected_service != service:
            logger.debug("[REFRESH] dropping stale result for %s", service)
            return False

        self.apply(payload)
        return True

    def apply(self, payload: ServicePayload, now: Optional[float] = None):
        """Run the merge and annotate passes over one payload."""
        if now is None:
            now = time.time()
        state = self.state
        state.info = payload.info
        state.service_data = merge_fields(
            state.service_data, payload.schema_items, payload.config_items
        )
        annotate_instances(state, payload.clients, now)

    # ── Editing ──────────────────────────────────────────────────

    def _field(self, key: str) -> FieldDefinition:
        data = self.state.service_data
        if data is None or key not in data:
            raise UnknownField(key)
        return data[key]

    def edit_field(self, key: str, value: Any) -> FieldDefinition:
        """Change a field locally without saving it."""
        if key == VERSION_FIELD:
            raise ValueError("The service version is read-only")
        field = self._field(key)
        field.value = value
        return field

    async def save_field(self, key: str) -> FieldDefinition:
        """Push the field's current value to the backend.

        On acknowledgment ``value_orig`` catches up with the value that was
        sent. ``config_set`` is left as is and polling keeps running.
        """
        if key == VERSION_FIELD:
            raise ValueError("The service version is read-only")
        service = self.state.selected_service
        field = self._field(key)
        value = field.value
        await self.backend.put_key(service, key, value)
        field.value_orig = value
        return field
