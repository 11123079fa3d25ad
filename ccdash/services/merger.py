"""Field merger — combines schema defaults and live config values."""

import logging
from typing import Optional

from ccdash.models.schemas import ConfigItem, FieldDefinition, SchemaItem
from ccdash.services.state import VERSION_FIELD, version_field

logger = logging.getLogger(__name__)


def merge_fields(
    service_data: Optional[dict[str, FieldDefinition]],
    schema: dict[str, SchemaItem],
    config: dict[str, ConfigItem],
) -> dict[str, FieldDefinition]:
    """Fold a fresh schema/config snapshot into ``service_data``.

    Fields are created once and never removed. A field whose ``config_set``
    flag is true is never overwritten again, so unsaved edits to it survive
    every later refresh. Returns the (possibly newly created) mapping.
    """
    if service_data is None:
        service_data = {}
    service_data.setdefault(VERSION_FIELD, version_field())

    for key, item in schema.items():
        if key in service_data:
            continue
        service_data[key] = FieldDefinition(
            title=item.title,
            type=item.type,
            description=item.description,
            default=item.default,
            value=item.default,
            value_orig=item.default,
        )

    for key, item in config.items():
        existing = service_data.get(key)
        if key == VERSION_FIELD:
            # Read-only, so there is no edit to protect
            existing.value = item.value
            existing.value_orig = item.value
            existing.config_set = True
        elif existing is None:
            # Config without schema: created once, then protected like the rest
            logger.debug("[MERGE] config key %r has no schema entry", key)
            service_data[key] = FieldDefinition(
                value=item.value,
                value_orig=item.value,
                config_set=True,
            )
        elif not existing.config_set:
            existing.value = item.value
            existing.value_orig = item.value
            existing.config_set = True

    return service_data
