"""Exception hierarchy for GOP analysis."""
from __future__ import annotations


class GOPAnalysisError(Exception):
    """Base exception for analysis failures."""


class InvalidInput(GOPAnalysisError):
    """Raised when the probe payload cannot be read as a frame list at all."""


class NoFrames(GOPAnalysisError):
    """Raised when the frame list is present but empty."""


class ProbeError(GOPAnalysisError):
    """Raised when an ffprobe run exits with a non-zero status."""

    def __init__(self, returncode: int, output: str):
        super().__init__(f"ffprobe failed (rc={returncode}): {output.strip()}")
        self.returncode = returncode
        self.output = output
