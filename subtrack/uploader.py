"""Stores freshly serialized subtitle files and hands back their new location."""

import logging
import os
import uuid
from abc import ABC, abstractmethod

from .exceptions import FileSystemError, UploadError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

class SubtitleUploader(ABC):
    """Abstract base class for subtitle storage backends."""

    @abstractmethod
    def upload(self, content: str, filename: str) -> str:
        """
        Stores a subtitle file.

        Args:
            content: The subtitle text.
            filename: Suggested file name, e.g. 'subtitles.vtt'.

        Returns:
            The `src` (URL or public path) of the stored file.

        Raises:
            UploadError: If the file cannot be stored.
        """
        pass


class LocalDirectoryUploader(SubtitleUploader):
    """Writes subtitle files into a directory served under a base URL."""

    def __init__(self, upload_dir: str, base_url: str = "/uploads/subtitles"):
        self.upload_dir = upload_dir
        self.base_url = base_url.rstrip("/")

    def _unique_name(self, filename: str) -> str:
        stem, ext = os.path.splitext(os.path.basename(filename) or "subtitles.vtt")
        return f"{stem or 'subtitles'}-{uuid.uuid4().hex[:8]}{ext or '.vtt'}"

    def upload(self, content: str, filename: str) -> str:
        name = self._unique_name(filename)
        file_path = os.path.join(self.upload_dir, name)
        try:
            ensure_dir_exists(self.upload_dir)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except (FileSystemError, OSError) as e:
            logger.error(f"Failed to store subtitle file {file_path}: {e}", exc_info=True)
            raise UploadError(f"Could not store subtitle file: {e}") from e
        src = f"{self.base_url}/{name}"
        logger.info(f"Stored subtitle file {file_path} as {src}")
        return src
