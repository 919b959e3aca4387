#!/usr/bin/env python3
"""
SHIPWRIGHT POSITION EXTRACTOR
-----------------------------
Turns the repeatable hardpoint and effect blocks of a ship into an ordered
list of Position entries, and derives the gun port / turret mount counts.

Arity table (tokens after the key, in order):
    engine          x, y, [zoom]
    gun / turret    x, y, [outfit]
    bay             bay type, x, y       ('launch effect' read from a child)
    leak            effect, x, y
    explode         effect, count
    final explode   effect               (single, not repeatable)

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Callable, Dict, List, Optional, Sequence

from shipwright.core.models import Position, PositionKind
from shipwright.parsing.extractor import LINE_KEY, POSITION_KEYS, VALUES_KEY
from shipwright.transformers.values import resolve_string
from shipwright.utils.numbers import is_number


def _number_at(values: Sequence[Any], index: int) -> Optional[float]:
    if index < len(values) and is_number(values[index]):
        return values[index]
    return None


def _text_at(values: Sequence[Any], index: int) -> Optional[str]:
    if index < len(values):
        return str(values[index])
    return None


def _engine(values, entry) -> Position:
    return Position(PositionKind.ENGINE, x=_number_at(values, 0), y=_number_at(values, 1), z=_number_at(values, 2))


def _gun(values, entry) -> Position:
    return Position(PositionKind.GUN, x=_number_at(values, 0), y=_number_at(values, 1), outfit=_text_at(values, 2))


def _turret(values, entry) -> Position:
    return Position(PositionKind.TURRET, x=_number_at(values, 0), y=_number_at(values, 1), outfit=_text_at(values, 2))


def _bay(values, entry) -> Position:
    return Position(
        PositionKind.BAY,
        bay_type=_text_at(values, 0),
        x=_number_at(values, 1),
        y=_number_at(values, 2),
        launch_effect=resolve_string(entry.get("launch effect")),
    )


def _leak(values, entry) -> Position:
    return Position(PositionKind.LEAK, effect=_text_at(values, 0), x=_number_at(values, 1), y=_number_at(values, 2))


def _explode(values, entry) -> Position:
    return Position(PositionKind.EXPLODE, effect=_text_at(values, 0), count=_number_at(values, 1))


BUILDERS: Dict[str, Callable[[Sequence[Any], Dict[str, Any]], Position]] = {
    "engine": _engine,
    "gun": _gun,
    "turret": _turret,
    "bay": _bay,
    "leak": _leak,
    "explode": _explode,
}


def _as_entry(item: Any) -> Dict[str, Any]:
    if isinstance(item, dict):
        return item
    if isinstance(item, (list, tuple)):
        return {VALUES_KEY: list(item)}
    if item is True:
        return {VALUES_KEY: []}
    return {VALUES_KEY: [item]}


def _occurrences(raw: Any) -> List[Dict[str, Any]]:
    """Every occurrence of a block as an entry dict, however it was shaped."""
    if raw is None or raw is False:
        return []
    items = raw if isinstance(raw, list) else [raw]
    return [_as_entry(item) for item in items]


def extract_positions(record: Dict[str, Any]) -> List[Position]:
    """
    One Position per block occurrence, in source line order. Entries with
    no recorded line keep kind-table order; 'final explode' comes last.
    """
    collected = []
    for key in POSITION_KEYS:
        for entry in _occurrences(record.get(key)):
            collected.append((entry.get(LINE_KEY, 0), BUILDERS[key](entry.get(VALUES_KEY, []), entry)))

    # Stable sort: equal lines keep kind-table order
    positions = [position for _, position in sorted(collected, key=lambda item: item[0])]

    final = resolve_string(record.get("final explode"))
    if final is not None:
        positions.append(Position(PositionKind.FINAL_EXPLODE, effect=final))
    return positions


class PositionExtractor:
    """
    Adds 'positions' and sets the mount counts. A missing gun or turret
    block leaves its count key absent rather than zero.
    """

    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        attributes = dict(record.get("attributes") or {})

        guns = _occurrences(record.get("gun"))
        turrets = _occurrences(record.get("turret"))
        if guns:
            attributes["gun ports"] = len(guns)
        if turrets:
            attributes["turret mounts"] = len(turrets)

        return {
            **record,
            "attributes": attributes,
            "positions": [position.to_dict() for position in extract_positions(record)],
        }
