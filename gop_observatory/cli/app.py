"""Command-line entry points for GOP Observatory."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..analyzer.pipeline import analyze_media_file
from ..config.schema import AnalysisConfig, ProbeConfig
from ..models.core import Dimensions
from ..models.errors import GOPAnalysisError
from ..report.gop_json import write_gop_json
from ..report.summary import format_text_summary, write_text_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='GOP structure analysis from ffprobe frame metadata',
    )
    parser.add_argument(
        'media',
        help='Media file to analyse (also used as the report source name)',
    )
    parser.add_argument(
        '--frames-json',
        type=Path,
        default=None,
        help='Read frames from saved `ffprobe -show_frames -print_format json` output instead of probing',
    )
    parser.add_argument(
        '--streams-json',
        type=Path,
        default=None,
        help='Read stream dimensions from saved `ffprobe -show_streams -print_format json` output',
    )
    parser.add_argument(
        '--stream-index',
        type=int,
        default=0,
        help='Video stream to analyse (ffprobe v:N numbering, default 0)',
    )
    parser.add_argument(
        '--size',
        type=_parse_size,
        default=None,
        help='Override frame dimensions used for compression ratios (WIDTHxHEIGHT)',
    )
    parser.add_argument(
        '--ffprobe',
        default='ffprobe',
        help='ffprobe executable name or path',
    )
    parser.add_argument(
        '--json',
        dest='json_out',
        type=Path,
        default=None,
        help='Also write the full analysis as JSON to this path',
    )
    parser.add_argument(
        '--summary',
        dest='summary_out',
        type=Path,
        default=None,
        help='Also write the text summary to this path',
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        help='Logging level (DEBUG, INFO, WARNING, ...)',
    )
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.INFO))
    logger = logging.getLogger(__name__)

    if args.stream_index < 0:
        raise SystemExit('--stream-index must be non-negative.')

    cfg = AnalysisConfig(
        media_file=args.media,
        stream_index=args.stream_index,
        dimensions=args.size,
        probe=ProbeConfig(ffprobe_path=args.ffprobe),
    )
    logger.debug('Analysis config: %s', cfg)

    frames_json = _read_optional(args.frames_json, logger)
    streams_json = _read_optional(args.streams_json, logger)

    try:
        result = analyze_media_file(cfg, frames_json=frames_json, streams_json=streams_json)
    except GOPAnalysisError as exc:
        logger.error('GOP analysis failed for %s: %s', cfg.media_file, exc)
        return 1

    logger.info(
        'Found %d GOP(s) | seekability %.1f/100',
        result.stats.total_gops,
        result.stats.seekability_score,
    )
    sys.stdout.write(format_text_summary(result))

    if args.summary_out is not None:
        write_text_summary(args.summary_out, result)
        logger.info('Wrote GOP summary to %s', args.summary_out)
    if args.json_out is not None:
        write_gop_json(args.json_out, result)
        logger.info('Wrote GOP JSON to %s', args.json_out)
    return 0


def _read_optional(path: Optional[Path], logger: logging.Logger) -> Optional[str]:
    if path is None:
        return None
    logger.info('Loading saved probe output from %s', path.name)
    return path.read_text(encoding='utf-8', errors='replace')


def _parse_size(value: str) -> Dimensions:
    stripped = value.strip().lower()
    parts = stripped.split('x')
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(
            f"Invalid size '{value}'. Use WIDTHxHEIGHT, e.g. 1920x1080."
        )
    try:
        width = int(parts[0])
        height = int(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid numeric component in '{value}'."
        ) from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"Size must be positive, got '{value}'.")
    return Dimensions(width=width, height=height)
