#!/usr/bin/env python3
"""
SHIPWRIGHT ERRORS
-----------------
Error taxonomy for the generation run. Everything here except
RecordValidationError is fatal: it aborts the run and surfaces to the CLI.

Author: Shipwright Team
Date: 2026-10-19
"""

from typing import List, Optional, Sequence


class ShipwrightError(Exception):
    """Base error carrying a trackable code and an optional remediation hint."""

    code = "E4001"

    def __init__(self, message: str, actionable: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.actionable = actionable


class ConfigurationError(ShipwrightError):
    code = "E4004"


class SourceDirectoryError(ShipwrightError):
    """The data root is missing or cannot be listed."""
    code = "E4005"


class NoMatchingFilesError(ShipwrightError):
    """Discovery found zero files for the configured patterns."""
    code = "E4008"

    def __init__(self, root: str, patterns: Sequence[str]):
        super().__init__(
            f"No game data files found matching [{', '.join(patterns)}] in {root}",
            "Check the data root and the configured file patterns.",
        )
        self.root = root
        self.patterns = list(patterns)


class MalformedIndentationError(ShipwrightError):
    """A line is indented more than one level below its enclosing parent."""
    code = "E4009"

    def __init__(self, line: int, path: Optional[str] = None, detail: str = ""):
        location = f"{path}:{line}" if path else f"line {line}"
        message = f"Malformed indentation at {location}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, "Every nested line must be exactly one level deeper than its parent.")
        self.line = line
        self.path = path

    def with_path(self, path: str) -> "MalformedIndentationError":
        """Re-issues the error with the originating file attached."""
        return MalformedIndentationError(self.line, path)


class ArtifactError(ShipwrightError):
    """A generated artifact is missing or structurally broken."""
    code = "E4010"


class RecordValidationError(ShipwrightError):
    """
    Per-record schema failure. Recoverable: the converter catches it,
    logs a warning and drops the record.
    """
    code = "E4003"

    def __init__(self, record_name: str, reasons: List[str]):
        super().__init__(f"{record_name}: {', '.join(reasons)}")
        self.record_name = record_name
        self.reasons = list(reasons)
