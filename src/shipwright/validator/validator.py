#!/usr/bin/env python3
"""
SHIPWRIGHT VALIDATOR - The Judge
--------------------------------
The Validator is the final safety gate of the pipeline. It checks each
transformed record against its catalog schema before the record is allowed
into an output batch. A failing record is dropped and reported; the batch
and the run carry on.

Author: Shipwright Team
Date: 2026-10-19
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from shipwright.core.errors import RecordValidationError
from shipwright.core.models import RecordKind, UNKNOWN_SPECIES
from shipwright.utils.numbers import is_number
from shipwright.utils.slug import slugify
from shipwright.validator.schemas import COORDINATE_KINDS, OUTFIT_SCHEMA, SHIP_SCHEMA

# Standardized logging for audit trails
logger = logging.getLogger("shipwright.validator")

SCHEMAS = {
    RecordKind.SHIP: SHIP_SCHEMA,
    RecordKind.OUTFIT: OUTFIT_SCHEMA,
}

_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": is_number,
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, list),
}


def record_label(record: Any) -> str:
    name = record.get("name") if isinstance(record, dict) else None
    return name if isinstance(name, str) and name else "unknown"


class RecordValidator:
    """
    Enforces schema integrity on transformed records and emits the final,
    immutable output shape (defaults filled, unset optionals omitted, slug
    attached).
    """

    def __init__(self, kind: RecordKind, log: Optional[logging.Logger] = None):
        self.kind = RecordKind(kind)
        self.schema = SCHEMAS[self.kind]
        self.log = log or logger

    def _deep_validate(self, value: Any, schema: Dict[str, Any], path: str, reasons: List[str]) -> None:
        """
        Recursively checks 'value' against 'schema', collecting every
        problem rather than stopping at the first.
        """
        expected = schema.get("type")
        check = _TYPE_CHECKS.get(expected)
        if check and not check(value):
            reasons.append(f"{path or '<record>'}: expected {expected}, got {type(value).__name__}")
            return

        if schema.get("non_empty") and not value:
            reasons.append(f"{path}: must not be empty")
        if "enum" in schema and value not in schema["enum"]:
            reasons.append(f"{path}: '{value}' is not one of {', '.join(schema['enum'])}")

        if expected == "object":
            for req in schema.get("required", []):
                if value.get(req) is None:
                    reasons.append(f"{path + '.' if path else ''}{req}: required")
            for key, field_schema in schema.get("fields", {}).items():
                if value.get(key) is not None:
                    self._deep_validate(value[key], field_schema, f"{path + '.' if path else ''}{key}", reasons)

        elif expected == "array" and "items" in schema:
            for i, item in enumerate(value):
                self._deep_validate(item, schema["items"], f"{path}[{i}]", reasons)

    def _check_positions(self, positions: Iterable[Any], reasons: List[str]) -> None:
        for i, position in enumerate(positions):
            if not isinstance(position, dict) or position.get("type") not in COORDINATE_KINDS:
                continue
            for axis in ("x", "y"):
                if position.get(axis) is None:
                    reasons.append(f"positions[{i}].{axis}: required for {position['type']}")

    def _finalize(self, record: Dict[str, Any]) -> Dict[str, Any]:
        final: Dict[str, Any] = {}
        for key, field_schema in self.schema["fields"].items():
            value = record.get(key)
            if value is None and "default" in field_schema:
                value = type(field_schema["default"])(field_schema["default"])
            if value is not None:
                final[key] = value
        final["slug"] = slugify(final["name"])
        return final

    def validate(self, record: Any) -> Tuple[Optional[Dict[str, Any]], List[str]]:
        """
        Returns (final_record, []) on success or (None, reasons) on failure.
        """
        reasons: List[str] = []
        self._deep_validate(record, self.schema, "", reasons)

        if not reasons and self.kind is RecordKind.SHIP:
            self._check_positions(record.get("positions") or [], reasons)

        if reasons:
            return None, reasons
        return self._finalize(record), []

    def report_failure(self, name: str, reasons: List[str], species: Optional[str] = None) -> None:
        prefix = f"[{species}] " if species and species != UNKNOWN_SPECIES else ""
        self.log.warning(f"Dropped {self.kind.value} {prefix}\"{name}\": {'; '.join(reasons)}")

    def enforce(self, record: Any) -> Dict[str, Any]:
        """Like validate, but raises RecordValidationError on failure."""
        final, reasons = self.validate(record)
        if final is None:
            raise RecordValidationError(record_label(record), reasons)
        return final
