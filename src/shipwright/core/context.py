#!/usr/bin/env python3
"""
SHIPWRIGHT BATCH CONTEXT
------------------------
The working record of one species batch for one record kind as it moves
through parse, transform, validate and write.

Author: Shipwright Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shipwright.core.models import BatchMetadata, GameDataFile, RecordKind


@dataclass
class BatchContext:
    """
    Initialized by the GenerationEngine per (kind, species) and enriched
    by each phase in turn.
    """
    kind: RecordKind
    species: str
    files: List[GameDataFile] = field(default_factory=list)   # Discovery order
    raw_records: List[Dict[str, Any]] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)  # Validated output
    metadata: Optional[BatchMetadata] = None
    artifact_path: Optional[str] = None
    written: bool = False

    @property
    def dropped(self) -> int:
        return len(self.raw_records) - len(self.records)


@dataclass
class GenerationReport:
    """Run summary returned to the CLI."""
    batches: List[BatchContext] = field(default_factory=list)

    def total(self, kind: RecordKind) -> int:
        return sum(len(b.records) for b in self.batches if b.kind is kind)

    def dropped(self, kind: RecordKind) -> int:
        return sum(b.dropped for b in self.batches if b.kind is kind)

    def species(self, kind: RecordKind) -> List[str]:
        return [b.species for b in self.batches if b.kind is kind]

    @property
    def files_written(self) -> int:
        return sum(1 for b in self.batches if b.written)
