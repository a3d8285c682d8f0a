"""Decoding helpers for ffprobe ``-show_frames`` JSON output."""
from __future__ import annotations

import json
import re
from typing import Any, List, Mapping, Optional, Sequence

from ..models.core import Frame
from ..models.errors import InvalidInput, NoFrames

_FLOAT_PREFIX_RE = re.compile(r"[+-]?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_INT_PREFIX_RE = re.compile(r"[+-]?\d+")

UNKNOWN_PICT_TYPE = '?'


def load_payload(text: str) -> Mapping[str, Any]:
    """Decode raw ffprobe JSON output into a mapping."""

    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"ffprobe output is not valid JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise InvalidInput('ffprobe output must be a JSON object')
    return data


def extract_frames(payload: Any) -> List[Mapping[str, Any]]:
    """Return the raw ``frames`` list, rejecting structurally unusable payloads."""

    if not isinstance(payload, Mapping):
        raise InvalidInput('ffprobe payload must be a JSON object')
    frames = payload.get('frames')
    if not isinstance(frames, list):
        raise InvalidInput("ffprobe payload has no 'frames' list")
    if not frames:
        raise NoFrames('ffprobe reported no frames')
    return frames


def decode_frames(records: Sequence[Any]) -> List[Frame]:
    return [decode_frame(record, idx) for idx, record in enumerate(records)]


def decode_frame(record: Any, frame_number: int) -> Frame:
    """Build a `Frame` from one loosely-typed ffprobe record.

    Frames are numbered by position in the probe output; ffprobe's own
    counters are ignored. Unusable fields fall back to defaults so a single
    bad record never aborts the batch.
    """

    data: Mapping[str, Any] = record if isinstance(record, Mapping) else {}

    pict_type = data.get('pict_type')
    if not isinstance(pict_type, str):
        pict_type = UNKNOWN_PICT_TYPE

    raw_pts = data.get('pkt_pts_time')
    if raw_pts is None:
        raw_pts = data.get('pts_time')
    pts_time = parse_float(raw_pts)
    byte_size = parse_int(data.get('pkt_size'))

    return Frame(
        frame_number=frame_number,
        pict_type=pict_type,
        pts_time=pts_time if pts_time is not None else 0.0,
        byte_size=byte_size if byte_size is not None else 0,
        is_keyframe=_is_keyframe(data.get('key_frame')),
    )


def parse_float(value: Any) -> Optional[float]:
    """Parse a float from a number or the numeric prefix of a string."""

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _FLOAT_PREFIX_RE.match(value.strip())
        if match:
            return float(match.group(0))
    return None


def parse_int(value: Any) -> Optional[int]:
    """Parse an int from an integer or the numeric prefix of a string."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        match = _INT_PREFIX_RE.match(value.strip())
        if match:
            return int(match.group(0))
    return None


def _is_keyframe(value: Any) -> bool:
    # numeric 1 only; strings and JSON booleans do not count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == 1
