"""Converts subtitle files on disk to WebVTT (or SRT) in one pass."""

import logging
import os
from typing import List, Optional, Tuple

from tqdm import tqdm

from .bidi import apply_rtl_to_vtt
from .cues import parse_cues
from .encoding import decode_subtitle_buffer
from .exceptions import FileSystemError, SubTrackError
from .subtitle_formatter import SubtitleFormatter, get_formatter
from .subtitle_service import SubtitleService
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

SUBTITLE_EXTENSIONS = ('.srt', '.vtt')

class SubtitleConverter:
    """
    Manages conversion of local subtitle files.

    VTT output goes through the same decode/normalize path as the HTTP
    endpoint. SRT output re-serializes the parsed cue list.
    """

    def __init__(self, service: SubtitleService, output_format: str = 'vtt', rtl: bool = False):
        """
        Initializes the SubtitleConverter.

        Args:
            service: Service providing decode and normalization.
            output_format: 'vtt' or 'srt'.
            rtl: Wrap RTL payload lines in bidi markers (VTT only). Leave off
                 for files that will be stored and served later.

        Raises:
            FormattingError: If the output format is unsupported.
        """
        self.service = service
        self.formatter: SubtitleFormatter = get_formatter(output_format)
        self.rtl = rtl

    def output_path_for(self, input_path: str, output_dir: Optional[str] = None) -> str:
        """Determines the output filename from the input path and format."""
        base_name = os.path.splitext(os.path.basename(input_path))[0]
        directory = output_dir or os.path.dirname(os.path.abspath(input_path))
        return os.path.join(directory, f"{base_name}.{self.formatter.extension}")

    def read_vtt(self, input_path: str) -> str:
        """Reads a subtitle file and returns it as unwrapped WebVTT text."""
        try:
            with open(input_path, 'rb') as f:
                buffer = f.read()
        except OSError as e:
            logger.error(f"Could not read subtitle file {input_path}: {e}")
            raise FileSystemError(f"Could not read subtitle file {input_path}: {e}") from e
        return self.service.prepare_vtt(decode_subtitle_buffer(buffer), source=input_path, rtl=False)

    def convert(self, input_path: str, output_path: Optional[str] = None) -> str:
        """
        Converts one subtitle file.

        Args:
            input_path: SRT or VTT file to read.
            output_path: Where to write; defaults to the input name with the
                         output format's extension, next to the input.

        Returns:
            The path of the written file.

        Raises:
            FileNotFoundError: If the input file does not exist.
            SubTrackError: If reading or writing fails.
        """
        if not os.path.isfile(input_path):
            raise FileNotFoundError(f"Input subtitle file not found: {input_path}")
        output_path = output_path or self.output_path_for(input_path)
        if os.path.abspath(output_path) == os.path.abspath(input_path):
            raise SubTrackError(f"Refusing to overwrite the input file: {input_path}")

        vtt = self.read_vtt(input_path)
        cues = parse_cues(vtt)
        if not cues:
            logger.warning(f"No cues recognized in {input_path}")

        if self.formatter.extension == 'vtt':
            text = apply_rtl_to_vtt(vtt) if self.rtl else vtt
            ensure_dir_exists(os.path.dirname(os.path.abspath(output_path)))
            try:
                with open(output_path, 'w', encoding='utf-8') as f:
                    f.write(text.strip() + "\n")
            except OSError as e:
                logger.error(f"Failed to write {output_path}: {e}", exc_info=True)
                raise FileSystemError(f"Could not write {output_path}: {e}") from e
        else:
            ensure_dir_exists(os.path.dirname(os.path.abspath(output_path)))
            self.formatter.write(cues, output_path)

        logger.info(f"Converted {input_path} -> {output_path} ({len(cues)} cue(s))")
        return output_path


def find_subtitle_files(input_dir: str) -> List[str]:
    """
    Finds all .srt and .vtt files in a directory, sorted by name.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    files = []
    for filename in sorted(os.listdir(input_dir)):
        # Case-insensitive check for subtitle extensions
        if filename.lower().endswith(SUBTITLE_EXTENSIONS):
            filepath = os.path.join(input_dir, filename)
            if os.path.isfile(filepath):
                files.append(filepath)
    logger.info(f"Found {len(files)} subtitle file(s) in {input_dir}")
    return files


def convert_batch(converter: SubtitleConverter, input_paths: List[str], output_dir: str, show_progress: bool = True) -> Tuple[int, int]:
    """
    Converts several subtitle files into one output directory.

    A failing file is logged and counted; the batch carries on.

    Args:
        converter: The configured converter.
        input_paths: Files to convert.
        output_dir: Directory for the converted files.
        show_progress: Display a tqdm progress bar.

    Returns:
        A (converted, failed) tuple of counts.
    """
    ensure_dir_exists(output_dir)
    converted = 0
    failed = 0
    with tqdm(total=len(input_paths), unit="file", desc="Starting Batch", disable=not show_progress) as pbar:
        for input_path in input_paths:
            filename = os.path.basename(input_path)
            pbar.set_description(f"Converting: {filename[:30]}")
            try:
                converter.convert(input_path, converter.output_path_for(input_path, output_dir))
                converted += 1
            except (SubTrackError, FileNotFoundError) as e:
                logger.error(f"Conversion failed for '{filename}': {e}")
                failed += 1
            finally:
                pbar.update(1) # Increment progress bar regardless of success/failure
    return converted, failed
