"""Stream-level helpers used to size the compression estimate."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..models.core import Dimensions, StreamInfo
from ..models.errors import InvalidInput
from .frames import parse_int


def parse_streams(payload: Any) -> List[StreamInfo]:
    """Map ffprobe ``-show_streams`` JSON onto `StreamInfo` records."""

    if not isinstance(payload, Mapping):
        raise InvalidInput('ffprobe payload must be a JSON object')
    streams = payload.get('streams')
    if not isinstance(streams, list):
        raise InvalidInput("ffprobe payload has no 'streams' list")
    return [
        _parse_stream(data, position)
        for position, data in enumerate(streams)
        if isinstance(data, Mapping)
    ]


def video_dimensions(streams: Sequence[StreamInfo], stream_index: int = 0) -> Optional[Dimensions]:
    """Return dimensions of the Nth video stream (ffprobe ``v:N`` numbering)."""

    video = [stream for stream in streams if stream.codec_type == 'video']
    if stream_index < 0 or stream_index >= len(video):
        return None
    return video[stream_index].dimensions


def parse_frame_rate(value: Any) -> Optional[Tuple[int, int]]:
    if not isinstance(value, str):
        return None
    parts = value.split('/')
    if len(parts) != 2:
        return None
    try:
        num, den = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if den <= 0:
        return None
    return num, den


def _parse_stream(data: Mapping[str, Any], position: int) -> StreamInfo:
    index = parse_int(data.get('index'))
    codec_type = data.get('codec_type')
    if codec_type not in ('video', 'audio', 'subtitle'):
        codec_type = 'unknown'
    stream = StreamInfo(
        index=index if index is not None else position,
        codec_type=codec_type,
        codec_name=data.get('codec_name'),
    )
    if codec_type != 'video':
        return stream
    return replace(
        stream,
        width=parse_int(data.get('width')),
        height=parse_int(data.get('height')),
        frame_rate=parse_frame_rate(data.get('r_frame_rate')),
        pixel_format=data.get('pix_fmt'),
    )
