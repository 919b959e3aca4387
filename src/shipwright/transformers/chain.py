#!/usr/bin/env python3
"""
SHIPWRIGHT TRANSFORMER CHAIN - The Assembly Line
------------------------------------------------
Runs raw records through an ordered list of transformers. Order matters:
every stage assumes the shape left behind by the stages before it, so the
ship chain is fixed here in one place.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol

from shipwright.transformers.attributes import AttributesNormalizer
from shipwright.transformers.numeric import NumericNormalizer
from shipwright.transformers.outfit import OutfitTransformer
from shipwright.transformers.outfits_list import OutfitsListTransformer
from shipwright.transformers.positions import PositionExtractor
from shipwright.transformers.text import (
    DescriptionsExtractor,
    LicensesExtractor,
    SpriteThumbnailExtractor,
)

# Fields a finished ship record carries; everything else was scaffolding
SHIP_OUTPUT_FIELDS = (
    "name",
    "plural",
    "sprite",
    "thumbnail",
    "attributes",
    "outfits",
    "positions",
    "descriptions",
)


class Transformer(Protocol):
    def transform(self, record: Dict[str, Any]) -> Dict[str, Any]:
        ...


class TransformerChain:
    """
    Left-to-right composition. Each stage returns a new dict; the input
    record is never mutated.
    """

    def __init__(self, stages: Iterable[Transformer], output_fields: Optional[Iterable[str]] = None):
        self.stages: List[Transformer] = list(stages)
        self.output_fields = tuple(output_fields) if output_fields else None

    def run(self, record: Dict[str, Any]) -> Dict[str, Any]:
        result = record
        for stage in self.stages:
            result = stage.transform(result)

        if self.output_fields is None:
            return result
        return {key: result.get(key) for key in self.output_fields}

    # Lets a chain act as a single stage inside another chain
    transform = run


def ship_chain() -> TransformerChain:
    return TransformerChain(
        [
            AttributesNormalizer(),
            NumericNormalizer(),
            LicensesExtractor(),
            OutfitsListTransformer(),
            DescriptionsExtractor(),
            SpriteThumbnailExtractor(),
            PositionExtractor(),
        ],
        output_fields=SHIP_OUTPUT_FIELDS,
    )


def outfit_chain() -> TransformerChain:
    return TransformerChain([OutfitTransformer()])
