#!/usr/bin/env python3
"""
SHIPWRIGHT PARTITIONER - File Discovery & Species Tagging
---------------------------------------------------------
Finds the source files for a record kind under the data root and tags
each with the species bucket it belongs to. The species is a pure
path-prefix computation: the first-level subdirectory of the root, or
'unknown' for files that sit directly under it.

Author: Shipwright Team
Date: 2026-10-19
"""

import logging
import os
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

from shipwright.core.errors import NoMatchingFilesError, SourceDirectoryError
from shipwright.core.models import GameDataFile, UNKNOWN_SPECIES

logger = logging.getLogger("shipwright.partitioner")

PathLike = Union[str, Path]


def species_for_path(path: PathLike, root: PathLike) -> str:
    """
    Maps a file path to its species tag.
    Example: data/hai/hai ships.txt -> 'hai'; data/ships.txt -> 'unknown'
    """
    rel_parts = Path(os.path.relpath(str(path), str(root))).parts
    if len(rel_parts) > 1 and rel_parts[0] not in (os.curdir, os.pardir):
        return rel_parts[0]
    return UNKNOWN_SPECIES


def matches_pattern(filename: str, patterns: Sequence[str]) -> bool:
    """
    Exact or species-prefixed match, case-insensitive, with or without
    the extension: 'ships.txt' matches 'ships.txt', 'hai ships.txt',
    'ships' and 'hai ships'.
    """
    entry = filename.lower()
    for pattern in patterns:
        full = pattern.lower()
        base = os.path.splitext(full)[0]
        if entry in (full, base) or entry.endswith(f" {full}") or entry.endswith(f" {base}"):
            return True
    return False


class FilePartitioner:
    """
    Walks the data root in sorted order so discovery (and therefore output
    array order) is identical across runs.
    """

    def __init__(self, skip_dirs: Iterable[str] = ("_deprecated",)):
        self.skip_dirs = frozenset(skip_dirs)

    def _walk(self, root: Path) -> List[Path]:
        found: List[Path] = []
        pending = [root]
        while pending:
            directory = pending.pop()
            try:
                entries = sorted(directory.iterdir(), key=lambda p: p.name)
            except OSError as e:
                raise SourceDirectoryError(f"Unable to read source directory {directory}: {e}")

            subdirs = []
            for entry in entries:
                if entry.is_symlink():
                    continue
                if entry.is_dir():
                    if entry.name not in self.skip_dirs:
                        subdirs.append(entry)
                elif entry.is_file():
                    found.append(entry)
            # Depth-first, alphabetical: reversed so the first subdir pops first
            pending.extend(reversed(subdirs))
        return found

    def discover(self, root_dir: PathLike, patterns: Sequence[str]) -> List[GameDataFile]:
        root = Path(root_dir)
        if not root.is_dir():
            raise SourceDirectoryError(
                f"Source directory not found: {root}",
                "Point --data-root at the game's 'data' directory.",
            )

        files: List[GameDataFile] = []
        for path in self._walk(root):
            if not matches_pattern(path.name, patterns):
                continue
            try:
                content = path.read_text(encoding='utf-8-sig')
            except (OSError, UnicodeDecodeError) as e:
                raise SourceDirectoryError(
                    f"Unable to read {path}: {e}",
                    "Source files must be UTF-8 text.",
                )
            files.append(GameDataFile(
                path=str(path),
                species=species_for_path(path, root),
                content=content,
            ))
            logger.debug(f"Discovered {path} ({files[-1].species})")

        if not files:
            raise NoMatchingFilesError(str(root), patterns)
        return files


def discover(root_dir: PathLike, patterns: Sequence[str]) -> List[GameDataFile]:
    return FilePartitioner().discover(root_dir, patterns)


def group_by_species(files: Sequence[GameDataFile]) -> Dict[str, List[GameDataFile]]:
    """Buckets files by species, preserving discovery order within each bucket."""
    buckets: Dict[str, List[GameDataFile]] = OrderedDict()
    for data_file in files:
        buckets.setdefault(data_file.species or UNKNOWN_SPECIES, []).append(data_file)
    return buckets
