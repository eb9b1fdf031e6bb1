"""Subtitle editing sessions: an owned cue buffer, raw/cue views and save-to-upload."""

import copy
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union

from .bidi import strip_rtl_markers
from .cues import FALLBACK_CUE_DURATION, parse_cues, serialize_cues
from .exceptions import EditorError
from .models import SubtitleCue, SubtitleTrack, public_path
from .subtitle_service import SubtitleService
from .uploader import SubtitleUploader
from .utils import normalize_newlines

logger = logging.getLogger(__name__)

class CueBuffer:
    """
    Mutable, ordered cue list with explicit commit semantics.

    Insertion order is presentation order; cues are never re-sorted. Edits mark
    the buffer dirty until `commit()` serializes it, and `discard()` rolls back
    to the last committed state.
    """

    def __init__(self, cues: Optional[List[SubtitleCue]] = None):
        self._cues: List[SubtitleCue] = [copy.copy(c) for c in cues or []]
        self._committed: List[SubtitleCue] = [copy.copy(c) for c in self._cues]
        self._dirty = False

    def __len__(self) -> int:
        return len(self._cues)

    def __iter__(self) -> Iterator[SubtitleCue]:
        return iter(self._cues)

    def __getitem__(self, index: int) -> SubtitleCue:
        return self._cues[index]

    @property
    def cues(self) -> List[SubtitleCue]:
        """A copy of the current cues."""
        return [copy.copy(c) for c in self._cues]

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def append(self, start_sec: Optional[float] = None, end_sec: Optional[float] = None, text: str = "") -> SubtitleCue:
        """
        Appends a new cue at the end of the buffer.

        Args:
            start_sec: Start time; defaults to the end of the last cue (or 0).
            end_sec: End time; defaults to start plus two seconds.
            text: Cue text.

        Returns:
            The appended cue.
        """
        if start_sec is None:
            start_sec = self._cues[-1].end_sec if self._cues else 0.0
        if end_sec is None:
            end_sec = start_sec + FALLBACK_CUE_DURATION
        cue = SubtitleCue(start_sec=max(0.0, start_sec), end_sec=end_sec, text=text)
        self._cues.append(cue)
        self._dirty = True
        return cue

    def remove(self, index: int) -> SubtitleCue:
        """Removes and returns the cue at `index`."""
        try:
            cue = self._cues.pop(index)
        except IndexError as e:
            raise EditorError(f"No cue at index {index}") from e
        self._dirty = True
        return cue

    def update(self, index: int, start_sec: Optional[float] = None, end_sec: Optional[float] = None, text: Optional[str] = None) -> SubtitleCue:
        """Edits fields of the cue at `index` in place; None leaves a field unchanged."""
        try:
            cue = self._cues[index]
        except IndexError as e:
            raise EditorError(f"No cue at index {index}") from e
        if start_sec is not None:
            cue.start_sec = max(0.0, start_sec)
        if end_sec is not None:
            cue.end_sec = end_sec
        if text is not None:
            cue.text = text
        self._dirty = True
        return cue

    def commit(self) -> str:
        """Serializes the buffer to WebVTT and marks the current state as committed."""
        vtt = serialize_cues(self._cues)
        self._committed = [copy.copy(c) for c in self._cues]
        self._dirty = False
        return vtt

    def discard(self) -> None:
        """Drops uncommitted edits."""
        self._cues = [copy.copy(c) for c in self._committed]
        self._dirty = False


@dataclass
class RawContent:
    """Editor content as free text."""
    text: str

    def to_cues(self) -> "CueContent":
        """
        Parses the text into cues.

        Lossy: cue identifiers, NOTE/STYLE blocks, headers and unrecognized
        lines are dropped, so converting back does not give the same text.
        """
        return CueContent(CueBuffer(parse_cues(self.text)))

    def to_raw(self) -> "RawContent":
        return self


@dataclass
class CueContent:
    """Editor content as a structured cue buffer."""
    buffer: CueBuffer

    def to_cues(self) -> "CueContent":
        return self

    def to_raw(self) -> RawContent:
        return RawContent(serialize_cues(self.buffer))


EditorContent = Union[RawContent, CueContent]


def strip_markers_from_text(text: str) -> str:
    """Removes bidi markers from every line of a raw subtitle document."""
    lines = normalize_newlines(text).split("\n")
    return "\n".join(strip_rtl_markers(line) for line in lines).strip()


class EditorSession:
    """One open subtitle track in the editor."""

    def __init__(self, track: SubtitleTrack, content: EditorContent, uploader: SubtitleUploader):
        self.track = track
        self.content = content
        self.uploader = uploader

    @property
    def mode(self) -> str:
        return "cues" if isinstance(self.content, CueContent) else "raw"

    def switch_to_raw(self) -> RawContent:
        self.content = self.content.to_raw()
        return self.content

    def switch_to_cues(self) -> CueContent:
        self.content = self.content.to_cues()
        return self.content

    def serialize(self) -> str:
        """Returns the text that `save()` would upload."""
        if isinstance(self.content, CueContent):
            return self.content.buffer.commit()
        return strip_markers_from_text(self.content.text)

    def save(self, filename: str = "subtitles.vtt") -> SubtitleTrack:
        """
        Uploads the edited subtitles as a new file.

        Returns:
            A copy of the track pointing at the uploaded file. Persisting it
            on the owning content item is the caller's job.

        Raises:
            EditorError: If there is nothing to save.
            UploadError: If the uploader fails.
        """
        text = self.serialize()
        if not text.strip():
            raise EditorError("Refusing to save empty subtitles.")
        new_src = self.uploader.upload(text, filename)
        logger.info(f"Saved subtitle track '{self.track.label}' to {new_src}")
        self.track = self.track.with_src(new_src)
        return self.track


class SubtitleEditor:
    """Opens editing sessions for subtitle tracks."""

    def __init__(self, service: SubtitleService, uploader: SubtitleUploader):
        self.service = service
        self.uploader = uploader

    def open(self, track: SubtitleTrack, mode: str = "cues") -> EditorSession:
        """
        Loads a track for editing.

        The text goes through the same decode and SRT conversion as playback
        but without bidi wrapping, so the editor shows clean text.
        Relative sources such as `subs/he.srt` are read as public paths.

        Raises:
            FetchError: If the track's file cannot be loaded.
            EditorError: If the mode is unknown.
        """
        if mode not in ("cues", "raw"):
            raise EditorError(f"Unknown editor mode '{mode}'")
        logger.info(f"Opening subtitle track '{track.label}' ({track.src}) in {mode} mode")
        vtt = self.service.load_vtt(public_path(track.src), rtl=False)
        content: EditorContent = RawContent(vtt)
        if mode == "cues":
            content = content.to_cues()
        return EditorSession(track, content, self.uploader)
