import json
from pathlib import Path

import pytest

from gop_observatory.gop.aggregate import calculate_stats
from gop_observatory.models.gop import GOP, GOPStats
from gop_observatory.report.gop_json import gop_stats_to_dict, write_gop_json
from gop_observatory.report.summary import format_text_summary, write_text_summary


def _sample_gop(index: int = 0, **overrides: object) -> GOP:
    fields = dict(
        index=index,
        start_frame=index * 4,
        end_frame=index * 4 + 3,
        start_pts_sec=index * 0.4,
        end_pts_sec=index * 0.4 + 0.3,
        duration_sec=0.3,
        frame_count=4,
        structure=('I', 'B', 'B', 'P'),
        total_bytes=100_000,
        i_frame_bytes=30_000,
        compression_ratio=124.416,
    )
    fields.update(overrides)
    return GOP(**fields)


def _sample_result() -> GOPStats:
    gops = [_sample_gop(0), _sample_gop(1, compression_ratio=None)]
    return GOPStats(
        media_file='demo.mp4',
        video_stream_index=0,
        total_frames=8,
        gops=gops,
        keyframe_positions=[(0.0, 0), (0.4, 4)],
        stats=calculate_stats(gops, 8),
    )


def test_write_gop_json_captures_metadata(tmp_path: Path) -> None:
    path = tmp_path / 'gop.json'
    write_gop_json(path, _sample_result())

    payload = json.loads(path.read_text())
    assert payload['media_file'] == 'demo.mp4'
    assert payload['total_frames'] == 8
    assert payload['stats']['total_gops'] == 2
    assert payload['stats']['i_frame_ratio'] == pytest.approx(25.0)
    assert payload['keyframe_positions'][1] == {'pts_time': 0.4, 'frame_number': 4}
    gop = payload['gops'][0]
    assert gop['structure'] == ['I', 'B', 'B', 'P']
    assert gop['i_frame_overhead'] == pytest.approx(30.0)
    assert gop['frame_type_counts'] == {'i': 1, 'p': 1, 'b': 2}
    assert gop['compression_ratio_str'] == '124.4:1'
    assert payload['gops'][1]['compression_ratio'] is None
    assert payload['gops'][1]['compression_ratio_str'] == 'N/A'


def test_gop_stats_to_dict_structure_round_trips_frame_count() -> None:
    payload = gop_stats_to_dict(_sample_result())
    assert all(len(gop['structure']) == gop['frame_count'] for gop in payload['gops'])


def test_write_text_summary_lists_gops(tmp_path: Path) -> None:
    path = tmp_path / 'summary.txt'
    write_text_summary(path, _sample_result())

    text = path.read_text()
    assert 'Source: demo.mp4 (v:0)' in text
    assert 'Total GOPs:        2' in text
    assert 'I 25.0% | P 25.0% | B 50.0%' in text
    assert 'GOP #1: frames 0-3 (4 frames)' in text
    assert 'I-frame overhead 30.0%' in text
    assert 'compression N/A' in text
    assert 'structure: IBBP' in text


def test_format_text_summary_elides_long_structures() -> None:
    long_gop = _sample_gop(frame_count=300, end_frame=299, structure=('I',) + ('P',) * 299)
    result = GOPStats(
        media_file='long.mp4',
        video_stream_index=0,
        total_frames=300,
        gops=[long_gop],
        keyframe_positions=[(0.0, 0)],
        stats=calculate_stats([long_gop], 300),
    )
    text = format_text_summary(result)
    assert 'structure: I' + 'P' * 47 + '...' in text


def test_format_text_summary_handles_no_gops() -> None:
    result = GOPStats(media_file='empty.mp4', video_stream_index=0, total_frames=0)
    text = format_text_summary(result)
    assert 'Seekability:       0.0/100' in text
    assert '(no GOPs)' in text
