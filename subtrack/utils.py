"""Utility functions for SubTrack."""

import math
import os
import logging
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def parse_time_to_seconds(value: str) -> float:
    """
    Parses a subtitle timestamp into seconds.

    Accepts HH:MM:SS.mmm, MM:SS.mmm or bare seconds; a comma millisecond
    separator is treated like a period. Never raises.

    Args:
        value: The timestamp text.

    Returns:
        The time in seconds, clamped to >= 0. Empty or unparseable input gives 0.
    """
    text = (value or "").strip()
    if not text:
        return 0.0
    parts = text.replace(",", ".").split(":")
    if len(parts) > 3:
        return 0.0
    try:
        seconds = float(parts[-1] or "0")
        for multiplier, part in zip((60, 3600), reversed(parts[:-1])):
            seconds += int(part) * multiplier
    except ValueError:
        return 0.0
    if not math.isfinite(seconds):
        return 0.0
    return max(0.0, seconds)

def _split_milliseconds(seconds: float):
    if not math.isfinite(seconds) or seconds < 0:
        seconds = 0.0 # Ensure finite, non-negative time
    milliseconds = round(seconds * 1000)
    hrs = milliseconds // 3600000
    milliseconds %= 3600000
    mins = milliseconds // 60000
    milliseconds %= 60000
    secs = milliseconds // 1000
    milliseconds %= 1000
    return hrs, mins, secs, milliseconds

def format_seconds_to_vtt(seconds: float) -> str:
    """
    Formats seconds into VTT time format HH:MM:SS.mmm.

    The hour component is always present so editor round-trips stay uniform.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    hrs, mins, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d}.{milliseconds:03d}"

def format_seconds_to_srt(seconds: float) -> str:
    """
    Formats seconds into SRT time format HH:MM:SS,ms.

    Args:
        seconds: Time in seconds.

    Returns:
        Formatted time string.
    """
    hrs, mins, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hrs:02d}:{mins:02d}:{secs:02d},{milliseconds:03d}"

def normalize_newlines(text: str) -> str:
    """Converts CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")
