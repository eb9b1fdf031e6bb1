"""Resolves the text encoding of raw subtitle bytes (UTF-8 vs Windows-1255 Hebrew)."""

import logging
import re

logger = logging.getLogger(__name__)

HEBREW_PATTERN = re.compile(r'[\u0590-\u05FF]')
LEGACY_HEBREW_ENCODING = 'cp1255'
UTF8_BOM = b'\xef\xbb\xbf'

def count_hebrew(text: str) -> int:
    """Counts characters in the Hebrew Unicode block."""
    return len(HEBREW_PATTERN.findall(text))

def decode_subtitle_buffer(buffer: bytes) -> str:
    """
    Decodes a subtitle byte buffer as UTF-8 or Windows-1255.

    Both decodings are tried and the one yielding strictly more Hebrew letters
    wins. Ties (including files with no Hebrew at all) go to UTF-8. Bytes that
    are invalid in either encoding become U+FFFD, so this never fails.

    Args:
        buffer: Raw subtitle file contents.

    Returns:
        The decoded text.
    """
    if not buffer:
        return ""

    buffer = bytes(buffer)
    if buffer.startswith(UTF8_BOM):
        # The BOM bytes read as a Hebrew letter in cp1255 and would skew the count
        buffer = buffer[len(UTF8_BOM):]

    as_utf8 = buffer.decode('utf-8', errors='replace')
    as_legacy = buffer.decode(LEGACY_HEBREW_ENCODING, errors='replace')

    hebrew_utf8 = count_hebrew(as_utf8)
    hebrew_legacy = count_hebrew(as_legacy)
    logger.debug(f"Hebrew letters: utf-8={hebrew_utf8}, {LEGACY_HEBREW_ENCODING}={hebrew_legacy}")

    if hebrew_legacy > hebrew_utf8:
        logger.debug(f"Decoded subtitle buffer as {LEGACY_HEBREW_ENCODING}")
        return as_legacy
    return as_utf8
