"""Pydantic models for backend payloads and dashboard view state."""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


# ── Backend Payloads ─────────────────────────────────────────────

class ServiceList(BaseModel):
    """Response of GET /api/1/services."""
    services: list[str] = Field(default_factory=list)


class SchemaItem(BaseModel):
    """A single configurable field declared by a service."""
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    default: Any = None


class ConfigItem(BaseModel):
    """A configuration value stored in the backend."""
    value: Any = None
    changed: Optional[int] = None


class ServicePayload(BaseModel):
    """Response of GET /api/1/services/{service}.

    ``schema`` and ``config`` are aliased because both names collide with
    attributes pydantic reserves on BaseModel.
    """
    model_config = ConfigDict(populate_by_name=True)

    info: Any = None
    schema_items: dict[str, SchemaItem] = Field(default_factory=dict, alias="schema")
    config_items: dict[str, ConfigItem] = Field(default_factory=dict, alias="config")
    clients: dict[str, dict[str, Any]] = Field(default_factory=dict)


# ── View Models ──────────────────────────────────────────────────

class FieldDefinition(BaseModel):
    """One editable configuration field, tracking unsaved edits.

    ``value_orig`` is the last value received from or confirmed by the
    backend. Once ``config_set`` is true, refreshes leave the field alone.
    """
    title: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    default: Any = None
    value: Any = None
    value_orig: Any = None
    config_set: bool = False

    @property
    def dirty(self) -> bool:
        return self.value != self.value_orig


class InstanceTag(BaseModel):
    """Health annotation attached to a client instance."""
    text: str
    type: str = Field(..., pattern="^(success|warning|danger)$")


class FieldUpdateRequest(BaseModel):
    """Request to edit (and optionally save) a configuration field."""
    value: Any


class FieldView(BaseModel):
    """A field as rendered on the dashboard."""
    key: str
    title: Optional[str]
    type: Optional[str]
    description: Optional[str]
    default: Any
    value: Any
    value_orig: Any
    dirty: bool
    read_only: bool = False


class InstanceView(BaseModel):
    """One row of the instance table."""
    id: str
    tags: list[InstanceTag]
    values: dict[str, Any]


class DashboardView(BaseModel):
    """Everything the dashboard page needs for one render."""
    services: list[str]
    selected_service: Optional[str]
    loading: bool
    info: Any = None
    fields: list[FieldView]
    instance_headers: dict[str, str]
    instances: list[InstanceView]
    instance_totals: dict[str, int]
