"""Fetches raw subtitle bytes from remote URLs or the local public directory."""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from .exceptions import FetchError, InvalidSourceError

logger = logging.getLogger(__name__)

class SubtitleFetcher(ABC):
    """Abstract base class for subtitle sources."""

    @abstractmethod
    def fetch(self, source: str) -> bytes:
        """
        Reads the raw bytes of a subtitle file.

        Args:
            source: URL or public path of the subtitle file.

        Returns:
            The undecoded file contents.

        Raises:
            FetchError: If the file cannot be read.
        """
        pass


class HttpSubtitleFetcher(SubtitleFetcher):
    """Downloads subtitle files over http(s) using httpx."""

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        """
        Initializes the HttpSubtitleFetcher.

        Args:
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx client (used by tests and
                    by callers that share a connection pool).
        """
        self.timeout = timeout
        self.client = client

    def fetch(self, source: str) -> bytes:
        logger.info(f"Fetching subtitles from URL: {source}")
        try:
            if self.client is not None:
                response = self.client.get(source, timeout=self.timeout, follow_redirects=True)
            else:
                response = httpx.get(source, timeout=self.timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Subtitle URL returned HTTP {e.response.status_code}: {source}")
            raise FetchError(f"Fetch failed with status {e.response.status_code}: {source}") from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching subtitles from {source}: {e}", exc_info=True)
            raise FetchError(f"Fetch failed for {source}: {e}") from e
        logger.debug(f"Fetched {len(response.content)} bytes from {source}")
        return response.content


class LocalSubtitleFetcher(SubtitleFetcher):
    """Reads subtitle files below a public directory, addressed by `/`-rooted paths."""

    def __init__(self, public_dir: str):
        self.public_dir = os.path.abspath(public_dir)

    def _resolve(self, source: str) -> str:
        relative = source.split("?", 1)[0].lstrip("/")
        file_path = os.path.abspath(os.path.join(self.public_dir, relative))
        if os.path.commonpath([self.public_dir, file_path]) != self.public_dir:
            raise InvalidSourceError(f"Path escapes the public directory: {source}")
        return file_path

    def fetch(self, source: str) -> bytes:
        file_path = self._resolve(source)
        logger.info(f"Reading subtitles from local file: {file_path}")
        if not os.path.isfile(file_path):
            raise FetchError(f"Subtitle file not found: {source}")
        try:
            with open(file_path, 'rb') as f:
                return f.read()
        except OSError as e:
            logger.error(f"Error reading subtitle file {file_path}: {e}", exc_info=True)
            raise FetchError(f"Could not read subtitle file {source}: {e}") from e


class CompositeSubtitleFetcher(SubtitleFetcher):
    """Dispatches http(s) URLs and public paths to the matching fetcher."""

    def __init__(self, http: SubtitleFetcher, local: SubtitleFetcher):
        self.http = http
        self.local = local

    def fetch(self, source: str) -> bytes:
        if source.startswith("http://") or source.startswith("https://"):
            return self.http.fetch(source)
        if source.startswith("/"):
            return self.local.fetch(source)
        raise InvalidSourceError(f"Invalid subtitle source: {source}")


def build_fetcher(config: dict) -> SubtitleFetcher:
    """Creates the default fetcher from configuration settings."""
    return CompositeSubtitleFetcher(
        http=HttpSubtitleFetcher(timeout=float(config.get('fetch_timeout', 10.0))),
        local=LocalSubtitleFetcher(config.get('public_dir', 'public')),
    )
