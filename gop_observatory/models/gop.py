"""Data structures describing GOP analysis results."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

_COUNTED_TYPES = ('i', 'p', 'b')


@dataclass(frozen=True)
class GOP:
    """A single Group of Pictures.

    A GOP runs from a keyframe up to (but excluding) the next keyframe run.
    The first member frame is treated as the reference frame: `i_frame_bytes`
    is its packet size whether or not ffprobe labelled it ``I``.

    `compression_ratio` compares an uncompressed YUV 4:2:0 estimate of the
    member frames against `total_bytes`. It is ``None`` when the stream
    dimensions are unknown or the GOP carries no bytes.
    """

    index: int
    start_frame: int
    end_frame: int
    start_pts_sec: float
    end_pts_sec: float
    duration_sec: float
    frame_count: int
    structure: Tuple[str, ...]
    total_bytes: int
    i_frame_bytes: int
    compression_ratio: Optional[float] = None

    @property
    def i_frame_overhead(self) -> float:
        """Percentage of the GOP's bytes spent on its first frame."""

        if self.total_bytes <= 0:
            return 0.0
        return self.i_frame_bytes / self.total_bytes * 100

    def frame_type_counts(self) -> Dict[str, int]:
        """Tally I/P/B frames (case-insensitive); other symbols are ignored."""

        counts = {key: 0 for key in _COUNTED_TYPES}
        for pict_type in self.structure:
            key = pict_type.lower()
            if key in counts:
                counts[key] += 1
        return counts

    @property
    def compression_ratio_str(self) -> str:
        if self.compression_ratio is None:
            return 'N/A'
        return f'{round(self.compression_ratio, 1)}:1'


@dataclass(frozen=True)
class AggregateStats:
    """Summary statistics across all GOPs of one stream."""

    total_gops: int
    avg_gop_size: float
    gop_size_variance: float
    avg_gop_duration_sec: float
    keyframe_interval_sec: float
    i_frame_ratio: float
    b_frame_ratio: float
    seekability_score: float
    p_frame_ratio: float = 0.0

    @classmethod
    def empty(cls) -> 'AggregateStats':
        return cls(
            total_gops=0,
            avg_gop_size=0.0,
            gop_size_variance=0.0,
            avg_gop_duration_sec=0.0,
            keyframe_interval_sec=0.0,
            i_frame_ratio=0.0,
            b_frame_ratio=0.0,
            seekability_score=0.0,
        )


@dataclass(frozen=True)
class GOPStats:
    """Top-level output from the GOP analysis pipeline."""

    media_file: str
    video_stream_index: int
    total_frames: int
    gops: List[GOP] = field(default_factory=list)
    keyframe_positions: List[Tuple[float, int]] = field(default_factory=list)
    stats: AggregateStats = field(default_factory=AggregateStats.empty)
