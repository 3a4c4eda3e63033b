"""Total coercion of model-extracted job fields into ExtractedJobFields.

Model output is unreliable: fields go missing, come back null, or arrive
with the wrong shape. Field-level defects are coerced and reported through
SchemaCoercionWarning; only a total parse failure (json_recovery) is fatal.
"""

import logging
import warnings
from typing import Any

from models.schemas.job_fields import (
    ARRAY_FIELDS,
    NOT_AVAILABLE,
    SCALAR_FIELDS,
    ExtractedJobFields,
)
from services.errors import SchemaCoercionWarning

logger = logging.getLogger(__name__)

_NA_SPELLINGS = frozenset({"n/a", "null", "not available"})


def _is_blank(value: str) -> bool:
    stripped = value.strip()
    return not stripped or stripped.lower() in _NA_SPELLINGS


def _warn(field: str, value: Any, target: str) -> None:
    logger.debug("Coercing %s from %s to %s", field, type(value).__name__, target)
    warnings.warn(
        f"Field '{field}' had type {type(value).__name__}; coerced to {target}",
        SchemaCoercionWarning,
        stacklevel=3,
    )


def coerce_string_list(value: Any, field: str = "value") -> list[str]:
    """Coerce any value into a list of non-blank strings."""
    if value is None:
        return []
    if isinstance(value, str):
        if _is_blank(value):
            return []
        _warn(field, value, "list")
        return [value.strip()]
    if isinstance(value, dict):
        _warn(field, value, "list")
        value = list(value.values())
    elif not isinstance(value, (list, tuple, set)):
        _warn(field, value, "list")
        return [str(value)]

    items: list[str] = []
    for item in value:
        if item is None:
            continue
        if not isinstance(item, str):
            if isinstance(item, (dict, list)):
                _warn(field, item, "skipped item")
                continue
            item = str(item)
        if not _is_blank(item):
            items.append(item.strip())
    return items


def coerce_scalar(value: Any, field: str = "value") -> str:
    """Coerce any value into a string, "N/A" when nothing usable remains."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, str):
        return NOT_AVAILABLE if _is_blank(value) else value.strip()
    if isinstance(value, (bool, int, float)):
        _warn(field, value, "str")
        return str(value)
    if isinstance(value, (list, tuple)):
        _warn(field, value, "str")
        parts = coerce_string_list(value, field)
        return ", ".join(parts) if parts else NOT_AVAILABLE
    _warn(field, value, NOT_AVAILABLE)
    return NOT_AVAILABLE


def enforce_job_schema(raw: Any) -> ExtractedJobFields:
    """Return a complete ExtractedJobFields record; never raises."""
    if not isinstance(raw, dict):
        logger.warning("Job extraction result was %s, not an object", type(raw).__name__)
        raw = {}

    values: dict[str, Any] = {}
    for field in SCALAR_FIELDS:
        values[field] = coerce_scalar(raw.get(field), field)
    for field in ARRAY_FIELDS:
        values[field] = coerce_string_list(raw.get(field), field)

    return ExtractedJobFields(**values)
