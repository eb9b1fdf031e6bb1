"""Right-to-left bidi marking for WebVTT cue payloads."""

import logging
import re

from .utils import normalize_newlines

logger = logging.getLogger(__name__)

RLE = "\u202b" # RIGHT-TO-LEFT EMBEDDING
PDF = "\u202c" # POP DIRECTIONAL FORMATTING

# Hebrew (U+0590-U+05FF) and Arabic (U+0600-U+06FF)
RTL_PATTERN = re.compile(r"[\u0590-\u05ff\u0600-\u06ff]")
VTT_TIMING_PATTERN = re.compile(
    r'^\d{2}:\d{2}:\d{2}\.\d{3}\s*-->\s*\d{2}:\d{2}:\d{2}\.\d{3}'
)
MARKER_PATTERN = re.compile(f"[{RLE}{PDF}]")

def contains_rtl(text: str) -> bool:
    """Returns True if the text has any Hebrew or Arabic character."""
    return bool(text) and RTL_PATTERN.search(text) is not None

def strip_rtl_markers(line: str) -> str:
    """Removes RLE/PDF markers and the whitespace around the line."""
    return MARKER_PATTERN.sub("", line).strip()

def apply_rtl_to_vtt(vtt: str) -> str:
    """
    Wraps every cue payload line of RTL WebVTT content in RLE ... PDF.

    Players that do not run bidi heuristics on text tracks otherwise render
    leading punctuation and embedded digits on the wrong side. Content with no
    Hebrew or Arabic character is returned as is (the very same string).

    Not idempotent: wrapping already wrapped text nests the markers again, so
    this runs once, at serve time, and never on stored files.

    Args:
        vtt: WebVTT text.

    Returns:
        WebVTT text with RTL payload lines wrapped.
    """
    if not contains_rtl(vtt):
        return vtt

    lines = normalize_newlines(vtt).split("\n")
    out = []
    wrapped = 0
    i = 0

    while i < len(lines):
        line = lines[i]
        if VTT_TIMING_PATTERN.match(line.strip()):
            out.append(line)
            i += 1
            while i < len(lines) and lines[i].strip() != "":
                out.append(f"{RLE}{lines[i]}{PDF}")
                wrapped += 1
                i += 1
            if i < len(lines):
                out.append(lines[i]) # blank separator
            i += 1
        else:
            out.append(line)
            i += 1

    logger.debug(f"Wrapped {wrapped} cue line(s) with RTL embedding markers")
    return "\n".join(out)
