"""Stream-wide statistics derived from a GOP list."""
from __future__ import annotations

from typing import Sequence

from ..models.gop import GOP, AggregateStats

# GOP size / variance at which each seekability penalty saturates
SEEK_SIZE_SATURATION = 120
SEEK_VARIANCE_SATURATION = 100
SEEK_PENALTY_CAP = 50.0


def calculate_stats(gops: Sequence[GOP], total_frames: int) -> AggregateStats:
    """Reduce `gops` into an `AggregateStats` record.

    Frame-type ratios are percentages of `total_frames` as supplied by the
    caller, not of the frames found inside the GOPs.
    """

    if not gops:
        return AggregateStats.empty()

    total_gops = len(gops)
    sizes = [gop.frame_count for gop in gops]
    avg_gop_size = sum(sizes) / total_gops
    variance = population_variance(sizes, avg_gop_size)
    avg_duration = sum(gop.duration_sec for gop in gops) / total_gops

    i_frames = 0
    p_frames = 0
    b_frames = 0
    for gop in gops:
        for pict_type in gop.structure:
            lowered = pict_type.lower()
            if lowered == 'i':
                i_frames += 1
            elif lowered == 'p':
                p_frames += 1
            elif lowered == 'b':
                b_frames += 1

    if total_frames > 0:
        i_frame_ratio = i_frames / total_frames * 100
        p_frame_ratio = p_frames / total_frames * 100
        b_frame_ratio = b_frames / total_frames * 100
    else:
        i_frame_ratio = 0.0
        p_frame_ratio = 0.0
        b_frame_ratio = 0.0

    return AggregateStats(
        total_gops=total_gops,
        avg_gop_size=avg_gop_size,
        gop_size_variance=variance,
        avg_gop_duration_sec=avg_duration,
        keyframe_interval_sec=avg_duration,
        i_frame_ratio=i_frame_ratio,
        b_frame_ratio=b_frame_ratio,
        seekability_score=seekability_score(avg_gop_size, variance),
        p_frame_ratio=p_frame_ratio,
    )


def population_variance(values: Sequence[float], mean: float) -> float:
    """Variance around `mean`, dividing by ``n``."""

    if len(values) < 2:
        return 0.0
    return sum((value - mean) ** 2 for value in values) / len(values)


def seekability_score(avg_gop_size: float, variance: float) -> float:
    """Score 0-100: short, uniform GOPs seek precisely; long or erratic ones don't."""

    size_penalty = min(avg_gop_size / SEEK_SIZE_SATURATION * SEEK_PENALTY_CAP, SEEK_PENALTY_CAP)
    variance_penalty = min(variance / SEEK_VARIANCE_SATURATION * SEEK_PENALTY_CAP, SEEK_PENALTY_CAP)
    return max(100 - size_penalty - variance_penalty, 0.0)
