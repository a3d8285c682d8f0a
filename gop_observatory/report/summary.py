"""Text-based GOP summary writer."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ..models.gop import GOP, GOPStats

# longer structures are elided in the breakdown
_MAX_STRUCTURE_CHARS = 48


def write_text_summary(path: Path, result: GOPStats) -> None:
    path.write_text(format_text_summary(result), encoding='utf-8')


def format_text_summary(result: GOPStats) -> str:
    """Render the statistics block followed by a per-GOP breakdown."""

    stats = result.stats
    lines: list[str] = []
    lines.append('GOP Analysis Summary')
    lines.append(f'Source: {result.media_file} (v:{result.video_stream_index})')
    lines.append(f'Total frames: {result.total_frames}')
    lines.append('')
    lines.append('Statistics:')
    lines.append(f'  Total GOPs:        {stats.total_gops}')
    lines.append(f'  Avg GOP size:      {stats.avg_gop_size:.1f} frames')
    lines.append(f'  GOP size variance: {stats.gop_size_variance:.2f}')
    lines.append(f'  Avg GOP duration:  {stats.avg_gop_duration_sec:.2f}s')
    lines.append(f'  Seekability:       {stats.seekability_score:.1f}/100')
    lines.append(
        '  Frame types:       I {i:.1f}% | P {p:.1f}% | B {b:.1f}%'.format(
            i=stats.i_frame_ratio,
            p=stats.p_frame_ratio,
            b=stats.b_frame_ratio,
        )
    )
    lines.append(f'  Keyframes:         {len(result.keyframe_positions)}')
    lines.append('')
    lines.append(f'GOP breakdown ({len(result.gops)}):')
    if not result.gops:
        lines.append('  (no GOPs)')
    else:
        for gop in result.gops:
            lines.extend(_format_gop_lines(gop))
    return '\n'.join(lines) + '\n'


def _format_gop_lines(gop: GOP) -> Iterable[str]:
    counts = gop.frame_type_counts()
    header = (
        f'  GOP #{gop.index + 1}: frames {gop.start_frame}-{gop.end_frame} '
        f'({gop.frame_count} frames) [{gop.start_pts_sec:.3f}s - {gop.end_pts_sec:.3f}s]'
    )
    detail = (
        f'      bytes={gop.total_bytes} | I-frame overhead {gop.i_frame_overhead:.1f}% | '
        f'compression {gop.compression_ratio_str} | '
        f"I={counts['i']} P={counts['p']} B={counts['b']}"
    )
    return [header, detail, f'      structure: {_elide(gop.structure)}']


def _elide(structure: Iterable[str]) -> str:
    text = ''.join(structure)
    if len(text) <= _MAX_STRUCTURE_CHARS:
        return text
    return text[:_MAX_STRUCTURE_CHARS] + '...'
