# File: /testdesk/services/condition_codec.py | Version: 1.0 | Title: Typed condition value <-> stored string
"""
Condition values are stored as text plus a value_type tag so they can be
handed back with the JSON type they arrived with.

    encode(5)          -> ("5", INT)
    encode([1, "a"])   -> ('[1, "a"]', ARRAY)
    decode(INT, "5")   -> 5
"""
from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from testdesk.core.constants import ConditionValueType
from testdesk.core.exceptions import ConditionDecodeError


def infer_value_type(value: Any) -> ConditionValueType:
    if isinstance(value, (list, tuple)):
        return ConditionValueType.ARRAY
    # bool is an int subclass but is stored as text
    if isinstance(value, int) and not isinstance(value, bool):
        return ConditionValueType.INT
    if isinstance(value, float):
        return ConditionValueType.FLOAT
    return ConditionValueType.STRING


def encode(value: Any) -> Tuple[Optional[str], ConditionValueType]:
    value_type = infer_value_type(value)
    if value is None:
        return None, value_type
    if value_type is ConditionValueType.ARRAY:
        return json.dumps(list(value), ensure_ascii=False), value_type
    if isinstance(value, dict):
        # Range and other object values are kept as JSON text
        return json.dumps(value, ensure_ascii=False), value_type
    if isinstance(value, bool):
        return ("true" if value else "false"), value_type
    return str(value), value_type


def _parse_value_type(raw: Any) -> ConditionValueType:
    if isinstance(raw, ConditionValueType):
        return raw
    try:
        return ConditionValueType(str(raw))
    except ValueError:
        raise ConditionDecodeError(raw) from None


def decode(value_type: Any, encoded: Optional[str]) -> Any:
    parsed = _parse_value_type(value_type)
    if encoded is None or not encoded.strip():
        return None
    if parsed is ConditionValueType.ARRAY:
        return json.loads(encoded)
    if parsed is ConditionValueType.INT:
        return int(encoded)
    if parsed is ConditionValueType.FLOAT:
        return float(encoded)
    return encoded
