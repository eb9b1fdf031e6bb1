#!/usr/bin/env python3
"""
SubTrack Batch Processing Entry Point

Converts every .srt/.vtt file in a directory to WebVTT (or SRT), fixing
Hebrew encodings along the way, and writes the results to an output folder.
"""

import argparse
import logging
import os
import sys
import time

from subtrack.api import build_service
from subtrack.config_loader import load_settings
from subtrack.converter import SubtitleConverter, convert_batch, find_subtitle_files
from subtrack.exceptions import SubTrackError, ConfigurationError
from subtrack.log_setup import setup_logging

# Initialize logger for this script
logger = logging.getLogger(__name__)


def run_batch_processing():
    """Parses arguments, sets up, and runs the batch subtitle conversion."""
    parser = argparse.ArgumentParser(
        description="SubTrack Batch: convert all subtitle files in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing the input .srt/.vtt files."
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for converted files (defaults to <input-dir>/converted)."
    )
    parser.add_argument(
        "-f", "--format",
        default="vtt",
        choices=["vtt", "srt"],
        help="Output subtitle format."
    )
    parser.add_argument(
        "--rtl",
        action="store_true",
        help="Wrap Hebrew/Arabic cue lines in bidi markers (only for files served as is)."
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )

    args = parser.parse_args()

    # --- Setup Logging (Initial) ---
    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    setup_logging(log_level=log_level, log_dir='logs', log_file='subtrack_batch_init.log')

    # --- Load Configuration ---
    try:
        config = load_settings(args.config)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration: {e}", exc_info=True)
        sys.exit(1)

    # --- Re-configure Logging (Final) ---
    setup_logging(log_level=log_level, log_dir=config.get('log_dir', 'logs'), log_file='subtrack_batch.log')

    # --- Find Subtitle Files ---
    try:
        input_paths = find_subtitle_files(args.input_dir)
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Input directory error: {e}")
        sys.exit(1)
    if not input_paths:
        logger.warning(f"No subtitle files found in {args.input_dir}. Exiting.")
        sys.exit(0)

    output_dir = args.output_dir or os.path.join(args.input_dir, "converted")

    try:
        converter = SubtitleConverter(build_service(config), output_format=args.format, rtl=args.rtl)
    except SubTrackError as e:
        logger.critical(f"Failed to initialize the converter: {e}")
        sys.exit(1)

    batch_start_time = time.time()
    logger.info(f"--- Starting batch conversion of {len(input_paths)} files into {output_dir} ---")
    try:
        converted, failed = convert_batch(converter, input_paths, output_dir)
    except SubTrackError as e:
        logger.critical(f"Batch conversion aborted: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
        sys.exit(1)

    logger.info(f"--- Batch conversion finished in {time.time() - batch_start_time:.2f} seconds ---")
    logger.info(f"Successfully converted: {converted}/{len(input_paths)} files")
    logger.info(f"Failed: {failed}/{len(input_paths)} files")

    sys.exit(1 if failed else 0) # Non-zero exit code signals partial failure


if __name__ == "__main__":
    run_batch_processing()
