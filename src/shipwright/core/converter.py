#!/usr/bin/env python3
"""
SHIPWRIGHT CONVERTER - Raw Records to Validated Batches
-------------------------------------------------------
Couples the transformer chain with the validator for one species batch.
Ships get an extra step: a variant ('ship "Base" "Variant"') is layered
over its base ship's raw record before it enters the chain.

Author: Shipwright Team
Date: 2026-10-19
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from shipwright.core.errors import RecordValidationError
from shipwright.core.models import RecordKind
from shipwright.parsing.extractor import POSITION_KEYS
from shipwright.transformers.chain import TransformerChain, outfit_chain, ship_chain
from shipwright.utils.merge import deep_merge
from shipwright.validator.validator import RecordValidator, record_label

logger = logging.getLogger("shipwright.converter")

# A variant that lists any of these replaces the base's block outright
VARIANT_REPLACED_KEYS = ("outfits", "final explode") + POSITION_KEYS


class RecordConverter:
    """
    Converts one batch of raw records into validated output records,
    preserving source order. Every dropped record yields exactly one
    warning on the injected logger.
    """

    def __init__(self, kind: RecordKind, log: Optional[logging.Logger] = None,
                 chain: Optional[TransformerChain] = None):
        self.kind = RecordKind(kind)
        self.log = log or logger
        self.chain = chain or (ship_chain() if self.kind is RecordKind.SHIP else outfit_chain())
        self.validator = RecordValidator(self.kind, self.log)

    def _resolve_variant(self, raw: Dict[str, Any], bases: Dict[str, Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        base = bases.get(raw["baseShip"])
        if base is None:
            return None
        overrides = {k: v for k, v in raw.items() if k != "baseShip"}
        return deep_merge(base, overrides, replace_keys=VARIANT_REPLACED_KEYS)

    def convert_one(self, raw: Any, bases: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Variant resolution, transformer chain and schema check for a single
        raw record. Raises RecordValidationError when the record is dropped.
        """
        name = record_label(raw)
        if not isinstance(raw, dict):
            raise RecordValidationError(name, ["record is not a mapping"])

        if self.kind is RecordKind.SHIP and "baseShip" in raw:
            merged = self._resolve_variant(raw, bases)
            if merged is None:
                raise RecordValidationError(
                    name, [f"variant references base ship \"{raw['baseShip']}\" which was not found"]
                )
            raw = merged

        try:
            transformed = self.chain.run(raw)
        except (TypeError, ValueError, AttributeError) as e:
            raise RecordValidationError(name, [f"transform failed: {e}"]) from e

        return self.validator.enforce(transformed)

    def convert(self, raw_records: Sequence[Any], species: Optional[str] = None) -> List[Dict[str, Any]]:
        bases: Dict[str, Dict[str, Any]] = {}
        if self.kind is RecordKind.SHIP:
            for raw in raw_records:
                if isinstance(raw, dict) and "baseShip" not in raw and isinstance(raw.get("name"), str):
                    bases.setdefault(raw["name"], raw)

        accepted: List[Dict[str, Any]] = []
        for raw in raw_records:
            try:
                accepted.append(self.convert_one(raw, bases))
            except RecordValidationError as e:
                self.validator.report_failure(e.record_name, e.reasons, species)
        return accepted


def convert_records(kind: RecordKind, raw_records: Sequence[Any], species: Optional[str] = None,
                    log: Optional[logging.Logger] = None) -> List[Dict[str, Any]]:
    return RecordConverter(kind, log).convert(raw_records, species)
