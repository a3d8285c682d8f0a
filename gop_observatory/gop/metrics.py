"""Per-GOP metric helpers."""
from __future__ import annotations

from typing import Optional, Sequence

from ..models.core import Dimensions, Frame
from ..models.gop import GOP

# Y plane at full resolution plus U and V at quarter resolution each
YUV420_BYTES_PER_PIXEL = 1.5


def uncompressed_estimate(
    dimensions: Dimensions,
    frame_count: int,
    *,
    bytes_per_pixel: float = YUV420_BYTES_PER_PIXEL,
) -> float:
    """Raw byte size of `frame_count` decoded pictures at `dimensions`."""

    return dimensions.width * dimensions.height * bytes_per_pixel * frame_count


def compression_ratio(
    total_bytes: int,
    frame_count: int,
    dimensions: Optional[Dimensions],
    *,
    bytes_per_pixel: float = YUV420_BYTES_PER_PIXEL,
) -> Optional[float]:
    """Ratio of the uncompressed estimate to the encoded size, if computable."""

    if dimensions is None or total_bytes <= 0:
        return None
    estimate = uncompressed_estimate(dimensions, frame_count, bytes_per_pixel=bytes_per_pixel)
    if estimate <= 0:
        return None
    return estimate / total_bytes


def build_gop(
    frames: Sequence[Frame],
    index: int,
    dimensions: Optional[Dimensions] = None,
) -> GOP:
    """Summarise one closed run of frames as a `GOP`."""

    if not frames:
        raise ValueError('cannot build a GOP from an empty frame run')
    first = frames[0]
    last = frames[-1]
    total_bytes = sum(frame.byte_size for frame in frames)
    return GOP(
        index=index,
        start_frame=first.frame_number,
        end_frame=last.frame_number,
        start_pts_sec=first.pts_time,
        end_pts_sec=last.pts_time,
        duration_sec=last.pts_time - first.pts_time,
        frame_count=len(frames),
        structure=tuple(frame.pict_type for frame in frames),
        total_bytes=total_bytes,
        i_frame_bytes=first.byte_size,
        compression_ratio=compression_ratio(total_bytes, len(frames), dimensions),
    )
