#!/usr/bin/env python3
"""
SHIPWRIGHT CONFIGURATION
------------------------
Pipeline settings: versions, source location, file patterns and the
source text conventions. Loaded from a YAML file; command-line flags
override individual values.

Author: Shipwright Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML, YAMLError

from shipwright.core.errors import ConfigurationError
from shipwright.core.models import RecordKind

DEFAULT_FILE_PATTERNS: Dict[str, List[str]] = {
    "ships": ["ships.txt", "kestrel.txt", "marauders.txt", "variants.txt"],
    "outfits": ["outfits.txt", "engines.txt", "power.txt", "weapons.txt"],
}

# YAML spelling -> dataclass attribute
_YAML_KEYS = {
    "gameVersion": "game_version",
    "schemaVersion": "schema_version",
    "dataRoot": "data_root",
    "outputDir": "output_dir",
    "filePatterns": "file_patterns",
    "commentMarker": "comment_marker",
    "tabWidth": "tab_width",
    "indentStep": "indent_step",
    "workers": "workers",
    "skipDirs": "skip_dirs",
}


@dataclass(frozen=True)
class PipelineConfig:
    game_version: str = "unknown"
    schema_version: str = "1"
    data_root: str = "data"
    output_dir: str = "output"
    file_patterns: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_FILE_PATTERNS.items()})
    comment_marker: str = "#"
    tab_width: int = 1
    indent_step: int = 1
    workers: int = 1
    skip_dirs: List[str] = field(default_factory=lambda: ["_deprecated"])

    def patterns_for(self, kind: RecordKind) -> List[str]:
        return list(self.file_patterns.get(RecordKind(kind).prefix, []))

    def with_overrides(self, **overrides: Any) -> "PipelineConfig":
        """Returns a copy with every non-None override applied."""
        applied = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **applied)
        config.check()
        return config

    def check(self) -> None:
        if not self.comment_marker:
            raise ConfigurationError("commentMarker must be a non-empty string")
        for name in ("tab_width", "indent_step", "workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        for kind in RecordKind:
            patterns = self.file_patterns.get(kind.prefix)
            if not patterns or not all(isinstance(p, str) for p in patterns):
                raise ConfigurationError(f"filePatterns.{kind.prefix} must be a non-empty list of filenames")


def config_from_mapping(data: Dict[str, Any]) -> PipelineConfig:
    unknown = sorted(set(data) - set(_YAML_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = {_YAML_KEYS[key]: value for key, value in data.items()}
    for name in ("game_version", "schema_version"):
        if name in values:
            values[name] = str(values[name])
    if "file_patterns" in values:
        merged = {k: list(v) for k, v in DEFAULT_FILE_PATTERNS.items()}
        merged.update({k: list(v) for k, v in (values["file_patterns"] or {}).items()})
        values["file_patterns"] = merged

    known = {f.name for f in fields(PipelineConfig)}
    config = PipelineConfig(**{k: v for k, v in values.items() if k in known})
    config.check()
    return config


def load_config(path: Optional[str] = None) -> PipelineConfig:
    """
    Loads a YAML configuration file. With no path, returns the defaults.
    """
    if path is None:
        return PipelineConfig()

    config_path = Path(path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = YAML(typ='safe').load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")
    return config_from_mapping(data)
