"""Data models for SubTrack."""

from dataclasses import dataclass, asdict, replace
from typing import Iterable, List, Optional
from urllib.parse import quote

SUBTITLES_ENDPOINT = "/api/subtitles"

@dataclass
class SubtitleCue:
    """Represents a single timed subtitle entry, times in seconds."""
    start_sec: float
    end_sec: float
    text: str

@dataclass(frozen=True)
class SubtitleTrack:
    """A subtitle track attached to a content item or episode."""
    label: str # Display name shown in the player menu
    lang: str  # Short language code, e.g. 'he'
    src: str   # URL or public path of the subtitle file

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SubtitleTrack":
        """
        Builds a track from its persisted mapping.

        Missing keys default to empty strings, matching how the admin form
        stores half-filled rows.
        """
        return cls(
            label=str(data.get('label', '')),
            lang=str(data.get('lang', '')),
            src=str(data.get('src', '')),
        )

    def with_src(self, new_src: str) -> "SubtitleTrack":
        """Returns a copy of this track pointing at a new subtitle file."""
        return replace(self, src=new_src)


def parse_track_list(items: Optional[Iterable[dict]]) -> List[SubtitleTrack]:
    """
    Converts the serialized track list of a content item into tracks.

    Order is preserved; entries without a `src` are dropped since the player
    cannot load them.

    Args:
        items: The persisted list of track mappings (may be None).

    Returns:
        A list of SubtitleTrack objects in presentation order.
    """
    tracks = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        track = SubtitleTrack.from_dict(item)
        if track.src:
            tracks.append(track)
    return tracks


def default_track(tracks: List[SubtitleTrack]) -> Optional[SubtitleTrack]:
    """The first track is the one the player activates by default."""
    return tracks[0] if tracks else None


def public_path(src: str) -> str:
    """Absolute URLs pass through; relative public paths gain a leading '/'."""
    if src.startswith("http") or src.startswith("/"):
        return src
    return "/" + src


def player_src(track: SubtitleTrack, base_url: str, endpoint: str = SUBTITLES_ENDPOINT) -> str:
    """
    Returns the `src` a video player should load for a track.

    Public files and `.srt` files are routed through the subtitles endpoint,
    which converts them to WebVTT and marks RTL cues. Remote `.vtt` files are
    loaded directly.

    Args:
        track: The stored subtitle track.
        base_url: Site origin used to make public paths absolute,
                  e.g. 'https://example.com'.
        endpoint: Path of the subtitles endpoint.
    """
    is_local = track.src.startswith("/")
    is_srt = track.src.lower().endswith(".srt")
    if not (is_local or is_srt):
        return track.src
    path = public_path(track.src)
    full_url = path if path.startswith("http") else base_url.rstrip("/") + path
    return f"{endpoint}?url={quote(full_url, safe='')}"


def tracks_for_player(tracks: List[SubtitleTrack], base_url: str, endpoint: str = SUBTITLES_ENDPOINT) -> List[SubtitleTrack]:
    """Rewrites every track's `src` with `player_src`, keeping order."""
    return [track.with_src(player_src(track, base_url, endpoint)) for track in tracks]
