"""Orchestrates the subtitle serving pipeline: fetch, decode, normalize, mark RTL."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .bidi import apply_rtl_to_vtt
from .encoding import decode_subtitle_buffer
from .exceptions import FetchError
from .fetcher import SubtitleFetcher
from .normalizer import normalize_to_vtt

logger = logging.getLogger(__name__)

VTT_CONTENT_TYPE = "text/vtt; charset=utf-8"

@dataclass
class VttResponse:
    """A ready-to-send WebVTT body with its HTTP headers."""
    body: str
    headers: Dict[str, str] = field(default_factory=dict)


class SubtitleService:
    """
    Turns a subtitle source into WebVTT suitable for an HTML text track.
    """

    def __init__(self, fetcher: SubtitleFetcher, cache_max_age: int = 3600):
        """
        Initializes the SubtitleService.

        Args:
            fetcher: Collaborator that reads raw subtitle bytes.
            cache_max_age: Seconds a served file may be cached publicly.
        """
        self.fetcher = fetcher
        self.cache_max_age = cache_max_age

    def prepare_vtt(self, text: str, source: Optional[str] = None, rtl: bool = True) -> str:
        """
        Normalizes decoded subtitle text to WebVTT.

        Args:
            text: Decoded SRT or WebVTT text.
            source: The file's URL or path; a `.srt` suffix forces conversion.
            rtl: Whether to wrap RTL payload lines in bidi markers. Only the
                 serving path sets this, stored files are kept unwrapped.

        Returns:
            WebVTT text.
        """
        vtt = normalize_to_vtt(text, source)
        if rtl:
            vtt = apply_rtl_to_vtt(vtt)
        return vtt

    def load_text(self, source: str) -> str:
        """
        Fetches and decodes a subtitle file.

        Raises:
            FetchError: If the source cannot be read.
        """
        buffer = self.fetcher.fetch(source)
        return decode_subtitle_buffer(buffer)

    def load_vtt(self, source: str, rtl: bool = True) -> str:
        """Fetches a subtitle file and returns it as WebVTT."""
        return self.prepare_vtt(self.load_text(source), source, rtl=rtl)

    def render(self, source: str) -> VttResponse:
        """
        Builds the text/vtt response for a subtitle source.

        Raises:
            FetchError: If the source cannot be read.
        """
        try:
            body = self.load_vtt(source, rtl=True)
        except FetchError as e:
            logger.error(f"Failed to load subtitles from {source}: {e}")
            raise
        return VttResponse(
            body=body,
            headers={
                "Content-Type": VTT_CONTENT_TYPE,
                "Cache-Control": f"public, max-age={self.cache_max_age}",
            },
        )
