#!/usr/bin/env python3
"""
SHIPWRIGHT ARTIFACT WRITER - High-Fidelity Output
-------------------------------------------------
Writes one '{prefix}-{species}.json' artifact per batch, atomically, and
reads artifacts back for the validate/stats commands. A rewrite whose only
difference is the generation timestamp is skipped so reruns leave the
tree untouched.

Author: Shipwright Team
Date: 2026-10-19
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from shipwright.core.errors import ArtifactError
from shipwright.core.models import BatchMetadata, RecordKind

logger = logging.getLogger("shipwright.writer")


def artifact_name(kind: RecordKind, species: str) -> str:
    return f"{RecordKind(kind).prefix}-{species}.json"


def _without_timestamp(document: Any) -> Any:
    if isinstance(document, dict) and isinstance(document.get("metadata"), dict):
        metadata = {k: v for k, v in document["metadata"].items() if k != "generatedAt"}
        return {**document, "metadata": metadata}
    return document


class ArtifactWriter:
    """
    Owns the output tree: <output_dir>/ships/ and <output_dir>/outfits/.
    """

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def kind_dir(self, kind: RecordKind) -> Path:
        return self.output_dir / RecordKind(kind).prefix

    def path_for(self, kind: RecordKind, species: str) -> Path:
        return self.kind_dir(kind) / artifact_name(kind, species)

    def render(self, metadata: BatchMetadata, data: List[Dict[str, Any]]) -> str:
        document = {"metadata": metadata.to_dict(), "data": data}
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    def write(self, kind: RecordKind, species: str, metadata: BatchMetadata, data: List[Dict[str, Any]]) -> bool:
        """
        Returns True when the file was written, False when the existing
        artifact already held the same content (ignoring generatedAt).
        """
        target = self.path_for(kind, species)
        target.parent.mkdir(parents=True, exist_ok=True)
        content = self.render(metadata, data)

        if target.exists():
            try:
                existing = json.loads(target.read_text(encoding='utf-8'))
            except (OSError, json.JSONDecodeError):
                existing = None
            if existing is not None and _without_timestamp(existing) == _without_timestamp(json.loads(content)):
                logger.debug(f"Unchanged: {target}")
                return False

        self._atomic_write(target, content)
        return True

    def _atomic_write(self, target_path: Path, content: str) -> None:
        temp_file = target_path.with_suffix('.shipwright.tmp')
        try:
            temp_file.write_text(content, encoding='utf-8')
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise ArtifactError(f"Atomic write failed for {target_path}: {e}")

    def read(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Loads an artifact and checks its {metadata, data} envelope."""
        artifact = Path(path)
        try:
            document = json.loads(artifact.read_text(encoding='utf-8'))
        except FileNotFoundError:
            raise ArtifactError(f"Artifact not found: {artifact}")
        except (OSError, json.JSONDecodeError) as e:
            raise ArtifactError(f"Unable to read artifact {artifact}: {e}")

        if not isinstance(document, dict) or not isinstance(document.get("metadata"), dict) \
                or not isinstance(document.get("data"), list):
            raise ArtifactError(f"{artifact} is not a {{metadata, data}} artifact")
        return document

    def validate_tree(self) -> Dict[str, int]:
        """
        Checks every artifact under the output tree. Returns record counts
        per kind; raises ArtifactError on the first broken or missing piece.
        """
        counts: Dict[str, int] = {}
        for kind in RecordKind:
            directory = self.kind_dir(kind)
            if not directory.is_dir():
                raise ArtifactError(f"{kind.prefix.capitalize()} directory not found at {directory}")
            artifacts = sorted(directory.glob("*.json"))
            if not artifacts:
                raise ArtifactError(f"No {kind.prefix} data files found in {directory}")

            total = 0
            for path in artifacts:
                document = self.read(path)
                declared = document["metadata"].get("itemCount")
                if declared != len(document["data"]):
                    raise ArtifactError(
                        f"{path}: metadata itemCount {declared} does not match {len(document['data'])} records"
                    )
                total += declared
            counts[kind.prefix] = total
        return counts
