from typing import Dict, List, Tuple

import pytest

from subtrack.exceptions import FetchError
from subtrack.fetcher import SubtitleFetcher
from subtrack.uploader import SubtitleUploader

SAMPLE_SRT = (
    "1\n00:00:01,000 --> 00:00:02,500\nHello world\n\n"
    "2\n00:00:03,000 --> 00:00:04,000\nLine one\nLine two\n"
)

HEBREW_VTT = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nשלום עולם\n"


class DictFetcher(SubtitleFetcher):
    """Serves bytes from a dict keyed by source."""

    def __init__(self, files: Dict[str, bytes]):
        self.files = files
        self.requested: List[str] = []

    def fetch(self, source: str) -> bytes:
        self.requested.append(source)
        if source not in self.files:
            raise FetchError(f"not found: {source}")
        return self.files[source]


class MemoryUploader(SubtitleUploader):
    """Keeps uploads in memory and returns predictable URLs."""

    def __init__(self):
        self.uploads: List[Tuple[str, str]] = []

    def upload(self, content: str, filename: str) -> str:
        self.uploads.append((filename, content))
        return f"https://cdn.example.com/{len(self.uploads)}/{filename}"


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def hebrew_vtt():
    return HEBREW_VTT


@pytest.fixture
def memory_uploader():
    return MemoryUploader()


@pytest.fixture
def make_fetcher():
    """Factory for a DictFetcher over the given {source: bytes} mapping."""
    return DictFetcher
