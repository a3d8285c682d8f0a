"""Configuration dataclasses for GOP Observatory."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..models.core import Dimensions


@dataclass(frozen=True)
class ProbeConfig:
    """Controls how ffprobe is located and invoked."""

    ffprobe_path: str = 'ffprobe'


@dataclass(frozen=True)
class AnalysisConfig:
    """High-level knobs for an analysis run."""

    media_file: str
    stream_index: int = 0
    dimensions: Optional[Dimensions] = None
    probe: ProbeConfig = field(default_factory=ProbeConfig)
