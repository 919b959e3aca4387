#!/usr/bin/env python3
"""
SHIPWRIGHT ATTRIBUTES NORMALIZER
--------------------------------
First link of the ship chain. Guarantees an 'attributes' dict, folds any
'add attributes' block into it and settles the category.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict, Optional

from shipwright.parsing.extractor import VALUE_KEY, VALUES_KEY
from shipwright.utils.merge import deep_merge

DEFAULT_CATEGORY = "Unknown"


class AttributesNormalizer:
    """
    Produces a record whose 'attributes' is always a fresh dict.
    The top-level 'category' is copied, never moved.
    """

    def _base_attributes(self, raw: Any) -> Dict[str, Any]:
        # Absent, or a bare 'attributes' line with no block
        if isinstance(raw, dict):
            return dict(raw)
        if isinstance(raw, list):
            # Repeated attributes blocks fold together in file order
            merged: Dict[str, Any] = {}
            for block in raw:
                if isinstance(block, dict):
                    merged = deep_merge(merged, block)
            return merged
        return {}

    def _add_block(self, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Supports both the quoted key ('"add attributes"') and the unquoted
        form, which the extractor sees as key 'add' with value 'attributes'.
        """
        block = record.get("add attributes")
        if isinstance(block, dict):
            return block
        add = record.get("add")
        if isinstance(add, dict) and add.get(VALUE_KEY) == "attributes":
            return {k: v for k, v in add.items() if k not in (VALUE_KEY, VALUES_KEY)}
        return None

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        attributes = self._base_attributes(record.get("attributes"))

        add_block = self._add_block(record)
        if add_block:
            attributes = deep_merge(attributes, add_block, additive=True)

        if record.get("category") and not attributes.get("category"):
            attributes["category"] = record["category"]

        if not attributes.get("category"):
            attributes["category"] = DEFAULT_CATEGORY

        return {**record, "attributes": attributes}
