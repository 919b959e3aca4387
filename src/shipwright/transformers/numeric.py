#!/usr/bin/env python3
"""
SHIPWRIGHT NUMERIC NORMALIZER
-----------------------------
Coerces the declared numeric attributes to finite numbers. A value that
cannot be coerced is dropped from the attributes silently; it never
defaults to zero.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict, Iterable, Optional

from shipwright.parsing.extractor import VALUE_KEY
from shipwright.utils.numbers import Number, is_number, parse_number

SHIP_NUMERIC_KEYS = (
    "cost",
    "shields",
    "hull",
    "required crew",
    "bunks",
    "mass",
    "drag",
    "heat dissipation",
    "fuel capacity",
    "cargo space",
    "outfit space",
    "weapon capacity",
    "engine capacity",
)


def normalize_numeric(value: Any) -> Optional[Number]:
    """
    Returns the finite number ``value`` stands for, or None.
    Wrapper dicts are unwrapped through '_value' until a scalar appears.
    """
    while isinstance(value, dict):
        if VALUE_KEY not in value:
            return None
        value = value[VALUE_KEY]

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if is_number(value) else None
    if isinstance(value, str):
        # NOTE: blank strings map to 0 while other junk is dropped.
        # Kept for compatibility with previously generated data.
        if not value.strip():
            return 0
        return parse_number(value)
    return None


def normalize_numeric_attributes(attributes: Dict[str, Any], numeric_keys: Iterable[str]) -> Dict[str, Any]:
    normalized = dict(attributes)
    for key in numeric_keys:
        if key not in normalized:
            continue
        number = normalize_numeric(normalized[key])
        if number is None:
            del normalized[key]
        else:
            normalized[key] = number
    return normalized


class NumericNormalizer:
    """Applies numeric coercion to the configured key set of 'attributes'."""

    def __init__(self, numeric_keys: Iterable[str] = SHIP_NUMERIC_KEYS):
        self.numeric_keys = tuple(numeric_keys)

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        attributes = record.get("attributes")
        if not isinstance(attributes, dict):
            return record
        return {**record, "attributes": normalize_numeric_attributes(attributes, self.numeric_keys)}
