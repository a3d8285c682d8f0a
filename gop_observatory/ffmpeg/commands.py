"""Helpers that wrap FFprobe invocations."""
from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List

from ..models.errors import ProbeError

logger = logging.getLogger(__name__)


def which_or_die(name: str) -> str:
    path = shutil.which(name)
    if not path:
        raise RuntimeError(f"Required executable not found in PATH: {name}")
    return path


def probe_frames(ffprobe_exe: str, media_path: Path, stream_index: int = 0) -> str:
    """Return ffprobe ``-show_frames`` JSON for one video stream."""

    cmd = [
        ffprobe_exe,
        "-v",
        "error",
        "-select_streams",
        f"v:{stream_index}",
        "-show_frames",
        "-print_format",
        "json",
        str(media_path),
    ]
    return _run_ffprobe(cmd, media_path)


def probe_streams(ffprobe_exe: str, media_path: Path) -> str:
    """Return ffprobe ``-show_streams`` JSON for the whole container."""

    cmd = [
        ffprobe_exe,
        "-v",
        "error",
        "-show_streams",
        "-print_format",
        "json",
        str(media_path),
    ]
    return _run_ffprobe(cmd, media_path)


def _run_ffprobe(cmd: List[str], media_path: Path) -> str:
    if not media_path.exists():
        raise FileNotFoundError(f"Missing media file: {media_path}")
    logger.debug("Running %s", " ".join(cmd))
    proc = subprocess.run(cmd, capture_output=True, text=True)
    if proc.returncode != 0:
        raise ProbeError(proc.returncode, proc.stderr or proc.stdout)
    return proc.stdout
