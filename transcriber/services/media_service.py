"""Audio duration checks backed by the ffprobe binary."""
from __future__ import annotations

import logging
import shutil
import subprocess

from ..errors import DurationProbeError

logger = logging.getLogger(__name__)


def ffprobe_available(ffprobe_bin: str = "ffprobe") -> bool:
    return shutil.which(ffprobe_bin) is not None


def probe_duration(path: str, ffprobe_bin: str = "ffprobe", timeout: int = 30) -> float:
    """Return the container duration of ``path`` in seconds"""
    cmd = [
        ffprobe_bin,
        "-v", "quiet",
        "-show_entries", "format=duration",
        "-of", "csv=p=0",
        path,
    ]
    try:
        res = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise DurationProbeError(f"{ffprobe_bin} not found") from e
    except subprocess.TimeoutExpired as e:
        raise DurationProbeError(f"{ffprobe_bin} timed out after {timeout}s") from e

    if res.returncode != 0:
        raise DurationProbeError((res.stderr or res.stdout or "ffprobe failed").strip())

    out = (res.stdout or "").strip()
    try:
        return float(out)
    except ValueError as e:
        raise DurationProbeError(f"Could not parse duration from ffprobe output: {out!r}") from e


def check_duration(path: str, max_seconds: float, ffprobe_bin: str = "ffprobe", timeout: int = 30) -> bool:
    """True when the audio is no longer than ``max_seconds``.

    Probe failures count as a rejection.
    """
    try:
        duration = probe_duration(path, ffprobe_bin=ffprobe_bin, timeout=timeout)
    except DurationProbeError as e:
        logger.error("Error checking duration: %s", e)
        return False

    logger.info("File duration: %s seconds", duration)
    return duration <= max_seconds
