"""Mutable view state shared by the derivation functions."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ccdash.models.schemas import FieldDefinition, InstanceTag

VERSION_FIELD = "v"


def version_field() -> FieldDefinition:
    """The synthetic, read-only service version entry."""
    return FieldDefinition(
        title="Version",
        type="string",
        description="Automatically incremented on each configuration change",
    )


@dataclass
class ViewState:
    """Everything derived from the currently selected service.

    ``service_data`` is None until the first refresh of a selection lands.
    ``instance_headers`` accumulates across refreshes; ``instance_totals``
    and ``instance_tags`` are rebuilt on every refresh.
    """

    services: list[str] = field(default_factory=list)
    selected_service: Optional[str] = None
    service_data: Optional[dict[str, FieldDefinition]] = None
    info: Any = None
    instances: dict[str, dict[str, Any]] = field(default_factory=dict)
    instance_headers: dict[str, str] = field(default_factory=dict)
    instance_tags: dict[str, list[InstanceTag]] = field(default_factory=dict)
    instance_totals: dict[str, int] = field(default_factory=dict)
    loading: bool = False

    def select(self, service: str):
        """Switch to ``service`` and discard everything derived so far."""
        self.selected_service = service
        self.service_data = None
        self.info = None
        self.instances = {}
        self.instance_headers = {}
        self.instance_tags = {}
        self.instance_totals = {}

    @property
    def current_version(self) -> Any:
        if not self.service_data or VERSION_FIELD not in self.service_data:
            return None
        return self.service_data[VERSION_FIELD].value
