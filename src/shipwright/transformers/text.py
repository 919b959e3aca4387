#!/usr/bin/env python3
"""
SHIPWRIGHT TEXT EXTRACTORS
--------------------------
Descriptions, licenses and image references arrive in several shapes;
these transformers settle each on a single one.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict, List, Optional

from shipwright.transformers.values import resolve_string, resolve_string_list


def extract_descriptions(description: Any) -> List[str]:
    """Every string-producing element, in order. Never None."""
    if description is None:
        return []
    return resolve_string_list(description)


def extract_licenses(licenses: Any) -> Optional[List[str]]:
    """
    Same shape rule as descriptions, but zero valid names yields None so
    'no licenses configured' stays distinct from an empty list.
    """
    if licenses is None:
        return None
    names = resolve_string_list(licenses)
    return names or None


class DescriptionsExtractor:
    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {**record, "descriptions": extract_descriptions(record.get("description"))}


class LicensesExtractor:
    """Rewrites attributes['licenses'] as a name list, or removes it."""

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        attributes = record.get("attributes")
        if not isinstance(attributes, dict) or "licenses" not in attributes:
            return record

        attributes = dict(attributes)
        licenses = extract_licenses(attributes["licenses"])
        if licenses is None:
            del attributes["licenses"]
        else:
            attributes["licenses"] = licenses
        return {**record, "attributes": attributes}


class SpriteThumbnailExtractor:
    """
    A sprite line can carry animation children, so the raw value may be
    a wrapper dict; only the image path survives.
    """

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **record,
            "sprite": resolve_string(record.get("sprite")),
            "thumbnail": resolve_string(record.get("thumbnail")),
        }
