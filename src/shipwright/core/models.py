#!/usr/bin/env python3
"""
SHIPWRIGHT CORE MODELS
----------------------
Defines the fundamental data structures used across the Shipwright pipeline.
These models represent the lowest level of game-data abstraction, from a
single parsed line up to the provenance stamp of an output batch.

Author: Shipwright Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

# Sentinel species for files that sit directly under the data root
UNKNOWN_SPECIES = "unknown"


@dataclass
class ParseNode:
    """
    One line of a game data file plus every line nested beneath it.

    A ParseNode is produced by the TreeBuilder from a tokenized line. The
    first token is the key; the remaining tokens are kept verbatim in
    ``values`` (quoted spans stay whole), and ``value`` is a convenience
    scalar for the common single-token case.
    """
    key: str                                   # The line's first token (e.g., 'ship', 'gun')
    values: List[str] = field(default_factory=list)  # Remaining tokens, in line order
    value: Optional[str] = None                # Single remaining token (or bare multi-word name)
    children: List["ParseNode"] = field(default_factory=list)
    line_no: int = 0                           # 1-based line in the originating file
    quoted: Tuple[bool, ...] = ()              # Per-token flag: was the token written in quotes

    def find(self, key: str) -> List["ParseNode"]:
        """Returns every direct child carrying ``key``, in file order."""
        return [child for child in self.children if child.key == key]


@dataclass
class GameDataFile:
    """
    A discovered source file and the species bucket it belongs to.
    Species is a partition tag derived from the path, never from content.
    """
    path: str
    species: str = UNKNOWN_SPECIES
    content: str = ""


class RecordKind(str, Enum):
    """The two record families the pipeline emits."""
    SHIP = "ship"
    OUTFIT = "outfit"

    @property
    def prefix(self) -> str:
        # Output artifacts are named 'ships-<species>.json' / 'outfits-<species>.json'
        return f"{self.value}s"


class PositionKind(str, Enum):
    """Hardpoints and effect-emission points a ship can declare."""
    ENGINE = "engine"
    GUN = "gun"
    TURRET = "turret"
    BAY = "bay"
    LEAK = "leak"
    EXPLODE = "explode"
    FINAL_EXPLODE = "final explode"


@dataclass(frozen=True)
class Position:
    """
    One occurrence of a position block on a ship.

    Only the fields meaningful to ``kind`` are populated; the rest stay None
    and are omitted from the serialized form.
    """
    kind: PositionKind
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None          # Engine zoom
    outfit: Optional[str] = None       # Gun/turret pre-installed outfit
    bay_type: Optional[str] = None
    launch_effect: Optional[str] = None
    effect: Optional[str] = None       # Leak/explode/final explode
    count: Optional[float] = None      # Explode

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind.value}
        for attr, out_key in (
            ("x", "x"), ("y", "y"), ("z", "z"), ("outfit", "outfit"),
            ("bay_type", "bayType"), ("launch_effect", "launchEffect"),
            ("effect", "effect"), ("count", "count"),
        ):
            value = getattr(self, attr)
            if value is not None:
                data[out_key] = value
        return data


@dataclass(frozen=True)
class BatchMetadata:
    """Provenance stamp written next to every species batch."""
    version: str
    schema_version: str
    species: str
    generated_at: str
    item_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "schemaVersion": self.schema_version,
            "species": self.species,
            "generatedAt": self.generated_at,
            "itemCount": self.item_count,
        }
