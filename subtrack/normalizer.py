"""Detects SRT subtitle content and converts it to WebVTT."""

import logging
import re
from typing import Optional
from urllib.parse import urlsplit

from .utils import normalize_newlines

logger = logging.getLogger(__name__)

VTT_HEADER = "WEBVTT"

# Matched against a single line, so no MULTILINE flag is needed here.
SRT_TIMING_PATTERN = re.compile(
    r'^(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})'
)
# Searched over the whole document: an optional index line, then a timing line.
SRT_CONTENT_PATTERN = re.compile(
    r'^(?:\d+\s*\n)?\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}',
    re.MULTILINE,
)
INDEX_LINE_PATTERN = re.compile(r'^\d+$')

def is_srt_content(text: str) -> bool:
    """
    Returns True if the text contains an SRT cue timing line.

    SRT timings use a comma before the milliseconds, which is what tells
    them apart from WebVTT timings.
    """
    if not text:
        return False
    return SRT_CONTENT_PATTERN.search(normalize_newlines(text).strip()) is not None

def srt_to_vtt(text: str) -> str:
    """
    Converts SRT subtitle content to WebVTT.

    Numeric index lines are dropped, commas in timing lines become periods
    and cue payload lines are copied verbatim. Lines that are neither an index,
    a timing line nor payload following a timing line are skipped.

    Args:
        text: Decoded SRT text.

    Returns:
        WebVTT text, trimmed of surrounding whitespace.
    """
    lines = normalize_newlines(text or "").strip().split("\n")
    out = [VTT_HEADER, ""]
    skipped = 0
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
        match = SRT_TIMING_PATTERN.match(lines[i])
        if not match:
            skipped += 1
            i += 1
            continue

        start = match.group(1).replace(",", ".")
        end = match.group(2).replace(",", ".")
        out.append(f"{start} --> {end}")
        i += 1
        payload = []
        while i < len(lines) and lines[i].strip():
            payload.append(lines[i])
            i += 1
        out.append("\n".join(payload))
        out.append("")

    if skipped:
        logger.debug(f"Skipped {skipped} unrecognized line(s) while converting SRT")
    return "\n".join(out).strip()

def needs_conversion(text: str, source: Optional[str] = None) -> bool:
    """
    Decides whether subtitle text must go through srt_to_vtt.

    A source whose path ends in `.srt` is always treated as SRT, otherwise
    the content is sniffed.
    """
    if source:
        path = urlsplit(source).path if "://" in source else source.split("?", 1)[0]
        if path.lower().endswith(".srt"):
            return True
    return is_srt_content(text)

def normalize_to_vtt(text: str, source: Optional[str] = None) -> str:
    """Returns WebVTT text for either SRT or WebVTT input."""
    if needs_conversion(text, source):
        logger.debug(f"Converting SRT content to WebVTT (source: {source})")
        return srt_to_vtt(text)
    return text
