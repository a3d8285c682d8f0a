"""Analysis pipeline that turns probe output into GOP statistics."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from ..config.schema import AnalysisConfig
from ..ffmpeg import commands
from ..gop.aggregate import calculate_stats
from ..gop.grouping import group_into_gops, keyframe_positions
from ..models.core import Dimensions, Frame
from ..models.errors import GOPAnalysisError, NoFrames
from ..models.gop import GOPStats
from ..probe import frames as frame_probe
from ..probe import streams as stream_probe

logger = logging.getLogger(__name__)


def run_analysis(
    *,
    frames: Sequence[Frame],
    media_file: str,
    stream_index: int = 0,
    dimensions: Optional[Dimensions] = None,
) -> GOPStats:
    """Group decoded frames into GOPs and summarise them."""

    if not frames:
        raise NoFrames(f"No frames to analyse for {media_file}")
    gops = group_into_gops(frames, dimensions)
    stats = calculate_stats(gops, len(frames))
    logger.debug(
        'Grouped %d frames into %d GOP(s) | avg size %.2f | seekability %.1f',
        len(frames),
        stats.total_gops,
        stats.avg_gop_size,
        stats.seekability_score,
    )
    return GOPStats(
        media_file=media_file,
        video_stream_index=stream_index,
        total_frames=len(frames),
        gops=gops,
        keyframe_positions=keyframe_positions(frames),
        stats=stats,
    )


def analyze_payload(
    payload: Any,
    *,
    media_file: str,
    stream_index: int = 0,
    dimensions: Optional[Dimensions] = None,
) -> GOPStats:
    """Analyse an already-decoded ffprobe ``-show_frames`` payload."""

    records = frame_probe.extract_frames(payload)
    return run_analysis(
        frames=frame_probe.decode_frames(records),
        media_file=media_file,
        stream_index=stream_index,
        dimensions=dimensions,
    )


def parse_frames_json(
    json_string: str,
    media_file: str,
    stream_index: int = 0,
    dimensions: Optional[Dimensions] = None,
) -> GOPStats:
    """Analyse raw ffprobe ``-show_frames`` JSON text."""

    payload = frame_probe.load_payload(json_string)
    return analyze_payload(
        payload,
        media_file=media_file,
        stream_index=stream_index,
        dimensions=dimensions,
    )


def analyze_media_file(
    cfg: AnalysisConfig,
    *,
    frames_json: Optional[str] = None,
    streams_json: Optional[str] = None,
) -> GOPStats:
    """Probe `cfg.media_file` (unless JSON is supplied) and analyse it.

    Explicit `cfg.dimensions` win over whatever the stream listing reports.
    """

    media_path = Path(cfg.media_file)

    dimensions = cfg.dimensions
    if dimensions is None:
        dimensions = _lookup_dimensions(cfg, media_path, streams_json)

    if frames_json is None:
        ffprobe_exe = commands.which_or_die(cfg.probe.ffprobe_path)
        logger.info('Probing frames: %s (v:%d)', media_path.name, cfg.stream_index)
        frames_json = commands.probe_frames(ffprobe_exe, media_path, cfg.stream_index)

    result = parse_frames_json(frames_json, cfg.media_file, cfg.stream_index, dimensions)
    logger.info('Parsed "%s" (%d frames, %d GOPs)', media_path.name, result.total_frames, len(result.gops))
    return result


def _lookup_dimensions(
    cfg: AnalysisConfig,
    media_path: Path,
    streams_json: Optional[str],
) -> Optional[Dimensions]:
    """Best-effort dimension lookup; any failure only drops compression ratios."""

    try:
        if streams_json is None:
            ffprobe_exe = commands.which_or_die(cfg.probe.ffprobe_path)
            logger.info('Probing streams: %s', media_path.name)
            streams_json = commands.probe_streams(ffprobe_exe, media_path)
        streams = stream_probe.parse_streams(frame_probe.load_payload(streams_json))
    except (RuntimeError, OSError, GOPAnalysisError) as exc:
        logger.warning('Stream lookup failed (%s); compression ratios will be omitted.', exc)
        return None

    dimensions = stream_probe.video_dimensions(streams, cfg.stream_index)
    if dimensions is None:
        logger.info('Video dimensions unknown; compression ratios will be omitted.')
    else:
        logger.info('Video stream v:%d is %dx%d', cfg.stream_index, dimensions.width, dimensions.height)
    return dimensions
