#!/usr/bin/env python3
"""
SHIPWRIGHT RECORD EXTRACTOR - The Archeologist (Phase 1.3)
----------------------------------------------------------
Walks a parsed forest and emits one raw record (a plain dict) per
top-level 'ship' or 'outfit' node. No normalization happens here: the
record is the union of every scalar and block found under the node,
with repeated keys accumulated rather than overwritten.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict, List, Sequence, Tuple

from shipwright.core.models import ParseNode, RecordKind
from shipwright.utils.numbers import parse_number

# Repeatable hardpoint/effect blocks; every occurrence becomes a list entry
POSITION_KEYS = ("engine", "gun", "turret", "bay", "leak", "explode")

# Fields the transformer chain expects in a known shape
STRUCTURAL_KEYS = frozenset(
    ("attributes", "outfits", "description", "sprite", "thumbnail", "final explode") + POSITION_KEYS
)

VALUE_KEY = "_value"
VALUES_KEY = "_values"
LINE_KEY = "_line"


def coerce_token(token: str, quoted: bool = False) -> Any:
    """Unquoted numeric literals become numbers; everything else stays text."""
    if quoted:
        return token
    number = parse_number(token)
    return token if number is None else number


def coerce_values(node: ParseNode) -> List[Any]:
    flags: Sequence[bool] = node.quoted or (False,) * len(node.values)
    return [coerce_token(token, flag) for token, flag in zip(node.values, flags)]


def _accumulate(result: Dict[str, Any], key: str, value: Any) -> None:
    """A repeated key turns into a list instead of overwriting."""
    if key in result:
        existing = result[key]
        if not isinstance(existing, list):
            result[key] = [existing]
        result[key].append(value)
    else:
        result[key] = value


def _scalar_of(node: ParseNode) -> Any:
    if node.value is None:
        return None
    if len(node.values) == 1:
        return coerce_token(node.values[0], bool(node.quoted and node.quoted[0]))
    return node.value


def nodes_to_object(nodes: Sequence[ParseNode], positional_keys: Sequence[str] = ()) -> Dict[str, Any]:
    """
    Converts sibling nodes into a dict:
      - leaf with one value      -> scalar
      - leaf with several values -> {'_value': first, '_values': [...]}
      - bare leaf                -> True (presence marker)
      - node with children       -> nested dict, own value kept under '_value'
      - positional key           -> appended to a list, tokens under '_values'
                                    and source line under '_line'
    """
    result: Dict[str, Any] = {}

    for node in nodes:
        values = coerce_values(node)
        scalar = _scalar_of(node)

        if node.key in positional_keys:
            entry = nodes_to_object(node.children, ())
            entry[VALUES_KEY] = values
            entry[LINE_KEY] = node.line_no
            result.setdefault(node.key, [])
            if not isinstance(result[node.key], list):
                result[node.key] = [result[node.key]]
            result[node.key].append(entry)
            continue

        if node.children:
            child_obj = nodes_to_object(node.children, ())
            if scalar is not None:
                child_obj[VALUE_KEY] = scalar
            elif values:
                child_obj[VALUE_KEY] = values[0]
                child_obj[VALUES_KEY] = values
            _accumulate(result, node.key, child_obj)
        elif scalar is not None:
            _accumulate(result, node.key, scalar)
        elif values:
            _accumulate(result, node.key, {VALUE_KEY: values[0], VALUES_KEY: values})
        else:
            result[node.key] = True

    return result


class RecordExtractor:
    """
    Emits raw records for one record kind. Ships also recognize the
    variant header form: ship "<base>" "<variant name>".
    """

    def __init__(self, kind: RecordKind):
        self.kind = RecordKind(kind)
        self.positional_keys: Tuple[str, ...] = POSITION_KEYS if self.kind is RecordKind.SHIP else ()

    def _header(self, node: ParseNode) -> Dict[str, Any]:
        if node.value is not None:
            return {"name": node.value}
        if self.kind is RecordKind.SHIP and len(node.values) >= 2:
            return {"name": node.values[1], "baseShip": node.values[0]}
        if node.values:
            return {"name": node.values[0]}
        return {"name": None}

    def extract(self, nodes: Sequence[ParseNode]) -> List[Dict[str, Any]]:
        records = []
        for node in nodes:
            if node.key != self.kind.value:
                continue
            record = self._header(node)
            body = nodes_to_object(node.children, self.positional_keys)
            # The header identity wins over any stray 'name' child
            body.pop("name", None)
            record.update(body)
            records.append(record)
        return records
