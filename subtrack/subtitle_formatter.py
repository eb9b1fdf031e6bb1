"""Handles formatting cue lists into subtitle files (VTT, SRT)."""

import logging
from abc import ABC, abstractmethod
from typing import Iterable, List

from .cues import serialize_cues
from .exceptions import FormattingError
from .models import SubtitleCue
from .utils import format_seconds_to_srt

logger = logging.getLogger(__name__)

class SubtitleFormatter(ABC):
    """Abstract base class for subtitle formatters."""

    extension = ""

    @abstractmethod
    def format_cues(self, cues: Iterable[SubtitleCue]) -> str:
        """
        Formats a cue list into subtitle file text.

        Args:
            cues: The cues, in presentation order.

        Returns:
            The subtitle file contents.
        """
        pass

    def write(self, cues: Iterable[SubtitleCue], output_path: str) -> None:
        """
        Formats the cues and writes them to a UTF-8 file.

        Args:
            cues: The cues to write.
            output_path: Path to save the subtitle file.

        Raises:
            FormattingError: If the file cannot be written.
        """
        cues = list(cues)
        logger.info(f"Writing {len(cues)} cue(s) as {self.extension.upper()} to: {output_path}")
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(self.format_cues(cues))
                f.write("\n")
        except IOError as e:
            logger.error(f"Failed to write subtitle file to {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not write subtitle file: {e}") from e


class VTTFormatter(SubtitleFormatter):
    """Formats subtitles into the WebVTT format used by HTML text tracks."""

    extension = "vtt"

    def format_cues(self, cues: Iterable[SubtitleCue]) -> str:
        return serialize_cues(cues)


class SRTFormatter(SubtitleFormatter):
    """Formats subtitles into the SRT (SubRip Text) format."""

    extension = "srt"

    def format_cues(self, cues: Iterable[SubtitleCue]) -> str:
        blocks: List[str] = []
        for subtitle_index, cue in enumerate(cues, start=1):
            start_time_str = format_seconds_to_srt(cue.start_sec)
            end_time_str = format_seconds_to_srt(cue.end_sec)
            blocks.append(f"{subtitle_index}\n{start_time_str} --> {end_time_str}\n{cue.text.strip() or ' '}")
        return "\n\n".join(blocks).strip()


FORMATTERS = {
    'vtt': VTTFormatter,
    'srt': SRTFormatter,
}

def get_formatter(name: str) -> SubtitleFormatter:
    """
    Returns a formatter instance by format name.

    Raises:
        FormattingError: If the format is not supported.
    """
    formatter_cls = FORMATTERS.get((name or "").lower())
    if formatter_cls is None:
        raise FormattingError(f"Unsupported output format '{name}'. Choose one of: {', '.join(FORMATTERS)}")
    return formatter_cls()
