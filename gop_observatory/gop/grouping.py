"""Keyframe-driven partitioning of a frame sequence into GOPs."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ..models.core import Dimensions, Frame
from ..models.gop import GOP
from .metrics import build_gop

FrameRun = Tuple[bool, List[Frame]]

_IDLE = 'idle'
_ACCUMULATING = 'accumulating'


def group_into_gops(
    frames: Sequence[Frame],
    dimensions: Optional[Dimensions] = None,
) -> List[GOP]:
    """Partition `frames` into GOPs at each run of keyframes.

    A run of adjacent keyframes opens a single GOP; the non-keyframe run that
    follows is appended to it. Frames seen before the first keyframe are
    accumulated the same way and are closed out as their own GOP once that
    keyframe run arrives, so every input frame lands in exactly one GOP.
    """

    gops: List[GOP] = []
    pending: List[Frame] = []
    state = _IDLE

    def flush() -> None:
        nonlocal pending, state
        if pending:
            gops.append(build_gop(pending, len(gops), dimensions))
        pending = []
        state = _IDLE

    for is_keyframe, run in iter_keyframe_runs(frames):
        if is_keyframe:
            if state == _ACCUMULATING:
                flush()
            pending = list(run)
        else:
            pending.extend(run)
        state = _ACCUMULATING
    flush()
    return gops


def iter_keyframe_runs(frames: Iterable[Frame]) -> Iterable[FrameRun]:
    """Yield maximal runs of adjacent frames sharing the same keyframe flag."""

    current: List[Frame] = []
    current_flag = False
    for frame in frames:
        if current and frame.is_keyframe != current_flag:
            yield current_flag, current
            current = []
        current_flag = frame.is_keyframe
        current.append(frame)
    if current:
        yield current_flag, current


def keyframe_positions(frames: Iterable[Frame]) -> List[Tuple[float, int]]:
    """Return ``(pts_time, frame_number)`` for every keyframe, in order."""

    return [(frame.pts_time, frame.frame_number) for frame in frames if frame.is_keyframe]
