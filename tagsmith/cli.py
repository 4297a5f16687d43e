from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_settings
from .meta_keys import DIFF_ORDER, FILENAME
from .models import PersistError
from .prompt_io import ConsolePromptIO, PromptIO
from .runner import TitleTagger, collect_audio_files
from .session import format_change
from .title_parser import parse_title

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

ANSI_RESET = "\033[0m"
ANSI_YELLOW = "\033[33m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[37m",
    logging.WARNING: ANSI_YELLOW,
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[35m",
}


class ShortPathFormatter(logging.Formatter):
    """Drop the tagged directory from messages so file names stay readable."""

    def __init__(self, fmt: str, roots: list[Path]) -> None:
        super().__init__(fmt)
        # Longest first so nested roots are stripped whole.
        self.prefixes = sorted((str(root) for root in roots if str(root)), key=len, reverse=True)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for prefix in self.prefixes:
            message = message.replace(f"{prefix}/", "").replace(prefix, "")
        return message


class ColorFormatter(ShortPathFormatter):
    def __init__(self, fmt: str, roots: list[Path], enabled: bool = True) -> None:
        super().__init__(fmt, roots)
        self.enabled = enabled

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not (self.enabled and color):
            return message
        return f"{color}{message}{ANSI_RESET}"


class WarningBufferHandler(logging.Handler):
    """Keeps warnings and errors so they can be repeated after the run."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.records: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.records.append(self.format(record))
        except Exception:  # pragma: no cover
            self.handleError(record)

    def summary_lines(self) -> list[str]:
        if not self.records:
            return []
        return [f"\n{ANSI_YELLOW}Warnings/Errors summary:{ANSI_RESET}"] + [f" - {line}" for line in self.records]


def configure_logging(level_name: str, roots: list[Path]) -> WarningBufferHandler:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(ColorFormatter(LOG_FORMAT, roots, enabled=sys.stderr.isatty()))
    root_logger.addHandler(console)

    warn_buffer = WarningBufferHandler()
    warn_buffer.setFormatter(ShortPathFormatter(LOG_FORMAT, roots))
    root_logger.addHandler(warn_buffer)

    logging.getLogger("mutagen").setLevel(logging.WARNING)
    return warn_buffer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tag audio files from their title tag")
    parser.add_argument("--config", type=Path, help="Path to tagsmith.yaml")
    parser.add_argument("--log-level", default="INFO", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    tag_parser = subparsers.add_parser(
        "tag", help="Propose tags and filenames for every audio file in a directory"
    )
    tag_parser.add_argument("directory", type=Path, help="Directory holding the downloads")
    tag_parser.add_argument(
        "--yes",
        action="store_true",
        help="Accept every proposal without asking",
    )
    tag_parser.add_argument(
        "--keep-artist",
        action="store_true",
        help="Keep the artist already tagged on the file as the main artist",
    )
    parse_parser = subparsers.add_parser(
        "parse", help="Show the proposal for one or more titles without touching files"
    )
    parse_parser.add_argument("titles", nargs="+", help="Titles to parse")
    return parser


def print_parsed(titles: List[str], prompt_io: PromptIO, title_template: str, filename_template: str) -> None:
    for title in titles:
        prompt_io.print(f"\n{title}")
        proposal = parse_title(title)
        if proposal is None:
            prompt_io.print("  nothing to extract")
            continue
        proposal.update(title_template, filename_template)
        values = proposal.tag_values()
        prompt_io.print("  " + format_change(FILENAME, None, proposal.filename or None))
        for name in DIFF_ORDER:
            prompt_io.print("  " + format_change(name, None, values.get(name)))


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    roots = [args.directory.resolve()] if args.command == "tag" else []
    warn_buffer = configure_logging(args.log_level, roots)
    tagging = settings.tagging
    prompt_io = ConsolePromptIO()

    try:
        match args.command:
            case "tag":
                overrides = {}
                if args.yes:
                    overrides["auto_accept"] = True
                if args.keep_artist:
                    overrides["keep_existing_artist"] = True
                if overrides:
                    tagging = tagging.model_copy(update=overrides)
                if not args.directory.is_dir():
                    raise SystemExit(f"Not a directory: {args.directory}")
                files = collect_audio_files(args.directory, tagging.include_extensions)
                if not files:
                    print("Nothing to tag.")
                    return
                print("\nTAGGING FILES...")
                tagger = TitleTagger(tagging, prompt_io=prompt_io)
                try:
                    report = tagger.run(files)
                except PersistError:
                    print(f"\nAborted: {tagger.report.summary()}")
                    raise SystemExit(1)
                print(f"\n{report.summary()}")
            case "parse":
                print_parsed(args.titles, prompt_io, tagging.title_template, tagging.filename_template)
            case _:
                parser.error("Unknown command")
    except (EOFError, KeyboardInterrupt):
        print("\nInput closed, stopping.")
        raise SystemExit(1)
    finally:
        for line in warn_buffer.summary_lines():
            print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
