"""JSON reporting helpers."""
from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict

from ..models.gop import GOP, GOPStats


def write_gop_json(path: Path, result: GOPStats) -> None:
    """Emit the full GOP analysis payload."""

    path.write_text(json.dumps(gop_stats_to_dict(result), indent=2), encoding='utf-8')


def gop_stats_to_dict(result: GOPStats) -> Dict[str, object]:
    return {
        'media_file': result.media_file,
        'video_stream_index': result.video_stream_index,
        'total_frames': result.total_frames,
        'stats': asdict(result.stats),
        'keyframe_positions': [
            {'pts_time': pts_time, 'frame_number': frame_number}
            for pts_time, frame_number in result.keyframe_positions
        ],
        'gops': [_gop_to_dict(gop) for gop in result.gops],
    }


def _gop_to_dict(gop: GOP) -> Dict[str, object]:
    return {
        'index': gop.index,
        'start_frame': gop.start_frame,
        'end_frame': gop.end_frame,
        'start_pts_sec': gop.start_pts_sec,
        'end_pts_sec': gop.end_pts_sec,
        'duration_sec': gop.duration_sec,
        'frame_count': gop.frame_count,
        'structure': list(gop.structure),
        'total_bytes': gop.total_bytes,
        'i_frame_bytes': gop.i_frame_bytes,
        'i_frame_overhead': gop.i_frame_overhead,
        'frame_type_counts': gop.frame_type_counts(),
        'compression_ratio': gop.compression_ratio,
        'compression_ratio_str': gop.compression_ratio_str,
    }
