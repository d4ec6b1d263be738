"""Coercion of caller-supplied local policy patches."""

from __future__ import annotations

import math
from numbers import Number
from typing import Any, Mapping

from ..aliases import POLICY_ALIASES
from ..errors import ValidationError

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def _coerce_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValidationError(f"{name} must be boolean", field=name)


def _coerce_non_negative_int(name: str, value: Any) -> int:
    message = f"{name} must be non-negative integer"
    if isinstance(value, bool):
        raise ValidationError(message, field=name)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as exc:
            raise ValidationError(message, field=name) from exc
    if not isinstance(value, Number):
        raise ValidationError(message, field=name)
    if not math.isfinite(value) or value < 0 or int(value) != value:
        raise ValidationError(message, field=name)
    return int(value)


def coerce_policy_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Map a raw patch onto ``LocalPolicy`` field names with coerced values.

    Unknown keys are dropped. A recognized key with an invalid value raises
    ``ValidationError`` naming it; a patch with nothing recognized raises
    ``ValidationError("no valid settings provided")``.
    """
    coerced: dict[str, Any] = {}
    for field_name, aliases in POLICY_ALIASES.items():
        for key in aliases:
            if key not in patch:
                continue
            if field_name == "clauses_enabled":
                coerced[field_name] = _coerce_bool(key, patch[key])
            else:
                coerced[field_name] = _coerce_non_negative_int(key, patch[key])
            break

    if not coerced:
        raise ValidationError("no valid settings provided")
    return coerced
