#!/usr/bin/env python3
"""
SHIPWRIGHT OUTFIT TRANSFORMER
-----------------------------
Reshapes a raw outfit record. Outfits have no attributes block in the
source format: every line that is not a known field is an attribute.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict

from shipwright.transformers.text import extract_descriptions, extract_licenses
from shipwright.transformers.values import resolve_string
from shipwright.utils.numbers import is_number

# Allow-list of fields that are not attributes
KNOWN_FIELDS = frozenset((
    "name",
    "plural",
    "category",
    "series",
    "index",
    "cost",
    "thumbnail",
    "mass",
    "outfit space",
    "description",
    "licenses",
    "attributes",
))

NUMERIC_FIELDS = ("index", "cost", "mass", "outfit space")


class OutfitTransformer:
    """Single-step transformer for outfit records."""

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": record.get("name"),
            "plural": record.get("plural"),
            "category": record.get("category"),
            "series": record.get("series"),
        }
        for key in NUMERIC_FIELDS:
            value = record.get(key)
            result[key] = value if is_number(value) else None

        thumbnail = record.get("thumbnail")
        result["thumbnail"] = thumbnail if isinstance(thumbnail, str) else resolve_string(thumbnail)

        attributes: Dict[str, Any] = {}
        licenses = extract_licenses(record.get("licenses"))
        if licenses:
            attributes["licenses"] = licenses

        # Everything outside the allow-list, in source order
        attributes.update((key, value) for key, value in record.items() if key not in KNOWN_FIELDS)

        result["attributes"] = attributes
        result["descriptions"] = extract_descriptions(record.get("description"))
        return result
