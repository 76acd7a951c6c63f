"""CLI for term tagging and keyword occurrence maps.

Commands:
    textmark annotate      Render tagging markup for a text file
    textmark occurrences   Map keyword occurrences and print their snippets

Examples:
    # Render markup with two words pre-tagged
    textmark annotate article.txt --tag revolution --tag labour

    # List occurrences of a pattern as JSON
    textmark occurrences article.txt "class(es)?" --json

    # Search for literal text containing regex characters
    textmark occurrences article.txt "C++" --literal
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
import traceback
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

# =============================================================================
# LOGGING SETUP
# =============================================================================

# Module-level logger
logger = logging.getLogger("textmark")


def _setup_logging(log_dir: Path | None = None, verbose: bool = False) -> Path | None:
    """Configure logging with console and optional file handlers.

    Args:
        log_dir: Directory for log files (no file logging if None)
        verbose: If True, set console to DEBUG level

    Returns:
        Path to the log file, or None without a log directory
    """
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    # Console handler - less verbose unless --verbose flag
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    if log_dir is None:
        return None

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"textmark_{timestamp}.log"

    # File handler - captures everything with full detail
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(file_handler)

    logger.info(f"Logging initialized - log file: {log_file}")
    return log_file


def _log_exception(msg: str, exc: Exception) -> None:
    """Log an exception with full traceback at debug level.

    Args:
        msg: Context message describing what failed
        exc: The exception that was raised
    """
    logger.error(f"{msg}: {type(exc).__name__}: {exc}")
    logger.debug(f"Traceback:\n{traceback.format_exc()}")


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="textmark",
        description="Tag terms in text and map keyword occurrences",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging on the console",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Also write a timestamped log file to this directory",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # =========================================================================
    # ANNOTATE SUBCOMMAND
    # =========================================================================
    annotate_parser = subparsers.add_parser(
        "annotate",
        help="Render tagging markup for a text file",
        description="Segment a text file into terms and print its markup.",
    )
    annotate_parser.add_argument(
        "input",
        type=Path,
        help="Text file to annotate",
    )
    annotate_parser.add_argument(
        "-t",
        "--tag",
        action="append",
        default=[],
        metavar="WORD",
        help="Tag a word before rendering (repeatable)",
    )
    annotate_parser.add_argument(
        "--channel-class",
        default="mark",
        help="Marker class for tagged words (default: mark)",
    )
    annotate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write markup to this file instead of stdout",
    )

    # =========================================================================
    # OCCURRENCES SUBCOMMAND
    # =========================================================================
    occurrences_parser = subparsers.add_parser(
        "occurrences",
        help="Map keyword occurrences and print their snippets",
        description="Index a keyword across a text file and print one line per occurrence.",
    )
    occurrences_parser.add_argument(
        "input",
        type=Path,
        help="Text file to search",
    )
    occurrences_parser.add_argument(
        "keyword",
        help="Case-insensitive regular expression",
    )
    occurrences_parser.add_argument(
        "--literal",
        action="store_true",
        help="Treat the keyword as literal text",
    )
    occurrences_parser.add_argument(
        "--color",
        default=None,
        help="Highlight color (default: from config)",
    )
    occurrences_parser.add_argument(
        "--json",
        action="store_true",
        help="Print occurrences as a JSON document",
    )

    return parser


def _read_input(path: Path) -> str | None:
    if not path.is_file():
        print(f"Error: Input file does not exist: {path}", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def _run_annotate_process(args: argparse.Namespace) -> int:
    """Render markup for a text file, optionally pre-tagging words.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from textmark.annotate import Annotator, Channel
    from textmark.errors import TextMarkError

    text = _read_input(args.input)
    if text is None:
        return 1

    try:
        annotator = Annotator(text, [Channel("cli", args.channel_class)])
        for word in args.tag:
            if annotator.add("cli", word) is None:
                logger.warning(f"Word {word!r} does not occur as a taggable term")
    except TextMarkError as e:
        _log_exception(f"Failed to annotate {args.input}", e)
        return 1

    markup = annotator.markup
    if args.output is not None:
        args.output.write_text(markup, encoding="utf-8")
        logger.info(f"Wrote markup to {args.output}")
    else:
        print(markup)
    return 0


def _run_occurrences_process(args: argparse.Namespace) -> int:
    """Print position, coordinate and snippet for every keyword occurrence.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    from textmark.errors import TextMarkError
    from textmark.occurrence import OccurrenceMap

    text = _read_input(args.input)
    if text is None:
        return 1

    keyword = re.escape(args.keyword) if args.literal else args.keyword
    try:
        occurrence_map = OccurrenceMap(text)
        markers = occurrence_map.highlight(keyword, args.color)
    except TextMarkError as e:
        _log_exception(f"Failed to index {args.keyword!r}", e)
        return 1

    rows = [
        {**asdict(marker), "snippet": occurrence_map.hover(marker.marker_id)} for marker in markers
    ]
    if args.json:
        print(json.dumps({"keyword": args.keyword, "occurrences": rows}, ensure_ascii=False, indent=2))
        return 0

    for row in rows:
        # One line per occurrence
        snippet = " ".join(row["snippet"].split())
        print(f"{row['position']:>8}  {row['coordinate']:8.2f}  {snippet}")
    print(f"{len(rows)} occurrences of {args.keyword!r}")
    return 0


def main() -> None:
    """Run the textmark command line."""
    parser = _create_parser()
    args = parser.parse_args()
    _setup_logging(args.log_dir, args.verbose)

    if args.command == "annotate":
        exit_code = _run_annotate_process(args)
        sys.exit(exit_code)
    elif args.command == "occurrences":
        exit_code = _run_occurrences_process(args)
        sys.exit(exit_code)
    else:
        parser.print_help()
        sys.exit(0 if args.command is None else 1)


if __name__ == "__main__":
    main()
