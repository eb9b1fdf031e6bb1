"""Command-Line Interface handler for SubTrack."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .api import build_service, create_app
from .config_loader import load_settings
from .converter import SubtitleConverter
from .cues import parse_cues
from .exceptions import SubTrackError, ConfigurationError
from .log_setup import setup_logging
from .subtitle_formatter import get_formatter
from .utils import format_seconds_to_vtt

logger = logging.getLogger(__name__) # Get logger for this module

# Commands whose stdout is data; their console logs go to stderr
DATA_COMMANDS = ("convert", "cues")

class CLIHandler:
    """Parses arguments and dispatches SubTrack commands."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            prog="subtrack",
            description="SubTrack: normalize SRT/WebVTT subtitles, fix Hebrew encodings and mark RTL cues.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-c", "--config",
            default=None,
            help="Path to the configuration YAML file (defaults are used when omitted)."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        convert = subparsers.add_parser("convert", help="Convert one subtitle file to WebVTT or SRT.")
        convert.add_argument("input", help="Path to the input .srt or .vtt file.")
        convert.add_argument("-o", "--output", default=None, help="Output file path.")
        convert.add_argument("-f", "--format", default="vtt", choices=["vtt", "srt"], help="Output format.")
        convert.add_argument("--rtl", action="store_true", help="Wrap Hebrew/Arabic cue lines in bidi markers.")

        cues = subparsers.add_parser("cues", help="Print the cue list parsed from a subtitle file.")
        cues.add_argument("input", help="Path to the input .srt or .vtt file.")
        cues.add_argument("--format", default="json", choices=["json", "srt", "vtt"], help="Output representation.")

        serve = subparsers.add_parser("serve", help="Run the /api/subtitles HTTP endpoint.")
        serve.add_argument("--host", default=None, help="Override the bind host from config.")
        serve.add_argument("--port", type=int, default=None, help="Override the port from config.")

        return parser

    def _load_config(self, args: argparse.Namespace) -> dict:
        try:
            return load_settings(args.config)
        except (ConfigurationError, FileNotFoundError) as e:
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            sys.exit(1)

    def _convert(self, args: argparse.Namespace, config: dict) -> None:
        converter = SubtitleConverter(build_service(config), output_format=args.format, rtl=args.rtl)
        output_path = converter.convert(args.input, args.output)
        print(output_path)

    def _cues(self, args: argparse.Namespace, config: dict) -> None:
        converter = SubtitleConverter(build_service(config))
        cue_list = parse_cues(converter.read_vtt(args.input))
        if args.format == "json":
            rows = [
                {
                    "index": i,
                    "start": format_seconds_to_vtt(cue.start_sec),
                    "end": format_seconds_to_vtt(cue.end_sec),
                    "start_sec": cue.start_sec,
                    "end_sec": cue.end_sec,
                    "text": cue.text,
                }
                for i, cue in enumerate(cue_list)
            ]
            print(json.dumps(rows, ensure_ascii=False, indent=2))
        else:
            print(get_formatter(args.format).format_cues(cue_list))

    def _serve(self, args: argparse.Namespace, config: dict) -> None:
        import uvicorn

        host = args.host or config.get('host', '127.0.0.1')
        port = args.port or int(config.get('port', 8000))
        logger.info(f"Serving subtitles on http://{host}:{port}/api/subtitles")
        uvicorn.run(create_app(build_service(config)), host=host, port=port, log_config=None)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the command."""
        args = self.parser.parse_args(argv)

        # --- Setup Logging ---
        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        console = sys.stderr if args.command in DATA_COMMANDS else sys.stdout
        setup_logging(log_level=log_level, stream=console)

        # --- Load Configuration ---
        config = self._load_config(args)
        setup_logging(
            log_level=log_level,
            log_dir=config.get('log_dir', 'logs'),
            log_file=config.get('log_file', 'subtrack.log'),
            stream=console,
        )

        handlers = {
            "convert": self._convert,
            "cues": self._cues,
            "serve": self._serve,
        }
        try:
            handlers[args.command](args, config)
        except (SubTrackError, FileNotFoundError) as e:
            # Catch errors originating from our application logic
            logger.error(f"A SubTrack error occurred: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            # Catch any other unexpected errors
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2) # Use a different exit code for unexpected crashes


def main() -> None:
    CLIHandler().run()
