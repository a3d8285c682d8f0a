"""Shared data structures used across the pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Frame:
    """Per-frame codec metadata as reported by ffprobe ``-show_frames``."""

    frame_number: int
    pict_type: str
    pts_time: float
    byte_size: int
    is_keyframe: bool


@dataclass(frozen=True)
class Dimensions:
    """Coded picture size of a video stream."""

    width: int
    height: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class StreamInfo:
    """Subset of ffprobe ``-show_streams`` data needed around GOP analysis.

    Only the structural fields that feed the compression estimate (and the
    handful shown next to it in reports) are kept; container-level metadata
    is not modelled here.
    """

    index: int
    codec_type: str
    codec_name: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[Tuple[int, int]] = None
    pixel_format: Optional[str] = None

    @property
    def is_video(self) -> bool:
        """True for video streams with usable (positive integer) dimensions."""

        return (
            self.codec_type == 'video'
            and _positive_int(self.width)
            and _positive_int(self.height)
        )

    @property
    def fps(self) -> Optional[float]:
        if self.frame_rate is None:
            return None
        num, den = self.frame_rate
        if den <= 0:
            return None
        return num / den

    @property
    def resolution(self) -> Optional[str]:
        if not (_positive_int(self.width) and _positive_int(self.height)):
            return None
        return f'{self.width}x{self.height}'

    @property
    def dimensions(self) -> Optional[Dimensions]:
        if not self.is_video:
            return None
        return Dimensions(width=self.width, height=self.height)


def _positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
