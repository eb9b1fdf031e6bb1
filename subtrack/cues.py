"""Parses SRT/VTT text into an editable cue list and serializes it back to WebVTT."""

import logging
import re
from typing import Iterable, List

from .bidi import strip_rtl_markers
from .models import SubtitleCue
from .normalizer import INDEX_LINE_PATTERN, VTT_HEADER
from .utils import format_seconds_to_vtt, normalize_newlines, parse_time_to_seconds

logger = logging.getLogger(__name__)

# Either millisecond separator, so SRT files, VTT files and hybrids of the two parse alike.
CUE_TIMING_PATTERN = re.compile(
    r'^(\d{2}:\d{2}:\d{2}[.,]\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2}[.,]\d{3})'
)
FALLBACK_CUE_DURATION = 2.0

def parse_cues(text: str) -> List[SubtitleCue]:
    """
    Parses SRT or WebVTT content into a list of cues.

    Bidi markers are stripped from payload lines so that repeated edit/save
    cycles never pile up nested markers. A cue whose end precedes its start
    is given a 2 second duration. Unrecognized lines are skipped.

    Args:
        text: SRT or WebVTT text.

    Returns:
        Cues in file order.
    """
    lines = normalize_newlines(text or "").strip().split("\n")
    cues = []
    i = 0

    while i < len(lines):
        line = lines[i]
        if not line.strip():
            i += 1
            continue
        if INDEX_LINE_PATTERN.match(line.strip()):
            i += 1
            if i >= len(lines):
                break
        match = CUE_TIMING_PATTERN.match(lines[i])
        if not match:
            i += 1
            continue

        start_sec = parse_time_to_seconds(match.group(1))
        end_sec = parse_time_to_seconds(match.group(2))
        i += 1
        payload = []
        while i < len(lines) and lines[i].strip():
            payload.append(strip_rtl_markers(lines[i]))
            i += 1

        if end_sec < start_sec:
            logger.debug(f"Cue at {start_sec:.3f}s ends before it starts, using {FALLBACK_CUE_DURATION}s duration")
            end_sec = start_sec + FALLBACK_CUE_DURATION
        cues.append(SubtitleCue(start_sec=start_sec, end_sec=end_sec, text="\n".join(payload)))

    logger.debug(f"Parsed {len(cues)} cue(s)")
    return cues

def serialize_cues(cues: Iterable[SubtitleCue]) -> str:
    """
    Serializes cues to WebVTT without any bidi wrapping.

    An empty cue text is written as a single space so the cue keeps a payload.
    """
    out = [VTT_HEADER, ""]
    for cue in cues:
        out.append(f"{format_seconds_to_vtt(cue.start_sec)} --> {format_seconds_to_vtt(cue.end_sec)}")
        out.append(cue.text.strip() or " ")
        out.append("")
    return "\n".join(out).strip()
