#!/usr/bin/env python3
"""
SHIPWRIGHT ENGINE - The High Orchestrator
-----------------------------------------
The GenerationEngine drives a run through its phases:

    1. Discover   source files for a record kind, tagged by species
    2. Parse      each file into a node forest (fatal on bad indentation)
    3. Extract    raw ship/outfit records
    4. Convert    transformer chain + validation (bad records dropped)
    5. Stamp      batch metadata and write one artifact per species

Species batches share no mutable state, so with workers > 1 they are
processed on a thread pool; within a batch, files keep discovery order.

Author: Shipwright Team
Date: 2026-10-19
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from shipwright.core.config import PipelineConfig
from shipwright.core.context import BatchContext, GenerationReport
from shipwright.core.converter import RecordConverter
from shipwright.core.errors import MalformedIndentationError
from shipwright.core.models import GameDataFile, ParseNode, RecordKind
from shipwright.ingest.partitioner import FilePartitioner, group_by_species
from shipwright.parsing.extractor import RecordExtractor
from shipwright.parsing.lexer import GameLexer
from shipwright.parsing.tree import TreeBuilder
from shipwright.services.metadata import Clock, MetadataService
from shipwright.services.writer import ArtifactWriter

logger = logging.getLogger("shipwright.engine")

ProgressCallback = Callable[[BatchContext], None]


class GenerationEngine:
    """
    Principal orchestrator for a generation run. Holds no per-batch state;
    everything a batch produces lives in its BatchContext.
    """

    def __init__(self, config: PipelineConfig, log: Optional[logging.Logger] = None,
                 clock: Optional[Clock] = None):
        self.config = config
        self.log = log or logger
        self.tree_builder = TreeBuilder(
            GameLexer(config.comment_marker, config.tab_width),
            indent_step=config.indent_step,
        )
        self.partitioner = FilePartitioner(config.skip_dirs)
        self.metadata = MetadataService(config.game_version, config.schema_version, clock)
        self.writer = ArtifactWriter(config.output_dir)

    def parse_file(self, data_file: GameDataFile) -> List[ParseNode]:
        try:
            return self.tree_builder.parse(data_file.content)
        except MalformedIndentationError as e:
            raise e.with_path(data_file.path) from e

    def build_batch(self, kind: RecordKind, species: str, files: Sequence[GameDataFile]) -> BatchContext:
        """Parses, extracts, converts and stamps one species batch (no I/O)."""
        context = BatchContext(kind=kind, species=species, files=list(files))
        extractor = RecordExtractor(kind)

        for data_file in context.files:
            context.raw_records.extend(extractor.extract(self.parse_file(data_file)))

        converter = RecordConverter(kind, self.log.getChild("converter"))
        context.records = converter.convert(context.raw_records, species)
        context.metadata = self.metadata.create_metadata(species, len(context.records))
        return context

    def _write(self, context: BatchContext) -> None:
        context.artifact_path = str(self.writer.path_for(context.kind, context.species))
        context.written = self.writer.write(context.kind, context.species, context.metadata, context.records)
        status = "Generated" if context.written else "Unchanged"
        self.log.info(
            f"{status} {len(context.records)} {context.kind.prefix} ({context.species}) "
            f"to {context.kind.prefix}-{context.species}.json"
        )

    def generate_kind(self, kind: RecordKind, write: bool = True,
                      progress_callback: Optional[ProgressCallback] = None) -> List[BatchContext]:
        kind = RecordKind(kind)
        self.log.info(f"Generating {kind.prefix} from {self.config.data_root}...")

        files = self.partitioner.discover(self.config.data_root, self.config.patterns_for(kind))
        buckets = group_by_species(files)

        if self.config.workers > 1 and len(buckets) > 1:
            with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
                # map() yields in submission order, keeping species order stable
                batches = list(pool.map(lambda item: self.build_batch(kind, *item), buckets.items()))
        else:
            batches = [self.build_batch(kind, species, bucket) for species, bucket in buckets.items()]

        for context in batches:
            if write:
                self._write(context)
            if progress_callback:
                progress_callback(context)

        total = sum(len(b.records) for b in batches)
        self.log.info(f"Total: {total} {kind.prefix} across {len(batches)} species")
        return batches

    def run(self, write: bool = True, progress_callback: Optional[ProgressCallback] = None) -> GenerationReport:
        """
        Full run over ships then outfits. Any fatal error propagates and
        aborts the run; dropped records only show up in the report and log.
        """
        report = GenerationReport()
        for kind in (RecordKind.SHIP, RecordKind.OUTFIT):
            report.batches.extend(self.generate_kind(kind, write=write, progress_callback=progress_callback))
        return report
