"""Command-line interface for read-along pagination.

WHY: Pagination heuristics get tuned by running them over real stored
word-timestamp files and reading where the pages broke. The CLI wires
the adapter, the engine and the formatters behind one command.

HOW: Uses argparse to accept an input JSON file (or "-" for stdin),
threshold overrides, output formats and an output directory. Settings
start from load_config() (.env / environment) and are overridden by
flags. Status messages go to stderr; output files are saved next to the
input (or to --output-dir). With stdin input the pagination JSON is
written to stdout.

RULES:
- Positional argument: input word-timestamp JSON path, or "-"
- --formats: comma-separated formatter keys (default: all registered)
- --max-page-chars / --breathing-gap-ms override the environment
- Output naming: {stem}{suffix}, e.g. chunk-0-pagination.json
- Exit code 1 on invalid input, pagination failure or bad arguments
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from readalong_pagination.adapters.word_timestamps import load_word_timestamps
from readalong_pagination.config import load_config
from readalong_pagination.core.ir import PaginationThresholds
from readalong_pagination.core.paginator import paginate
from readalong_pagination.errors import PaginationError
from readalong_pagination.formatters import FORMATTERS


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_formats(raw: Optional[str]) -> List[str]:
    """Parse the --formats flag into registered formatter keys.

    Raises:
        ValueError: If any key is not registered.
    """
    if not raw:
        return sorted(FORMATTERS.keys())
    keys = [k.strip() for k in raw.split(",") if k.strip()]
    unknown = [k for k in keys if k not in FORMATTERS]
    if unknown:
        raise ValueError(
            "Unknown format(s): {}. Available: {}".format(
                ", ".join(unknown), ", ".join(sorted(FORMATTERS.keys()))
            )
        )
    return keys


def _positive(cast: type):
    """argparse type: convert with cast and reject anything not > 0."""

    def parse(raw: str):
        try:
            value = cast(raw)
        except ValueError:
            raise argparse.ArgumentTypeError("must be a number, got {!r}".format(raw)) from None
        if not value > 0:
            raise argparse.ArgumentTypeError("must be positive, got {!r}".format(raw))
        return value

    return parse


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="readalong_pagination",
        description="Split time-aligned words into screen-sized read-along pages.",
    )

    parser.add_argument(
        "input_file",
        help="Word-timestamp JSON file (a list of words or an object with "
             "a 'words' list). Use '-' to read from stdin.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--max-page-chars",
        type=_positive(int),
        default=None,
        help="Pages longer than this are split at conjunctions and pauses "
             "(default: PAGINATION_MAX_PAGE_CHARS or 64).",
    )

    parser.add_argument(
        "--breathing-gap-ms",
        type=_positive(float),
        default=None,
        help="Minimum pause between words that counts as a breathing gap "
             "(default: PAGINATION_BREATHING_GAP_MS or 60).",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every pagination pass.",
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """Run the pagination pipeline for parsed arguments; return an exit code."""
    try:
        config = load_config()
        formats = _resolve_formats(args.formats)
    except ValueError as exc:
        _status("Error: {}".format(exc))
        return 1

    if args.max_page_chars is not None:
        config = dataclasses.replace(config, max_page_chars=args.max_page_chars)
    if args.debug:
        config = dataclasses.replace(config, debug=True)

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    thresholds = PaginationThresholds(break_pause_second=args.breathing_gap_ms)

    try:
        words, source_text = load_word_timestamps(args.input_file)
        result = paginate(words, thresholds, config=config, source_text=source_text)
    except (PaginationError, OSError) as exc:
        _status("Error: {}".format(exc))
        return 1

    _status("Paginated {} words into {} pages ({} breaks)".format(
        result.summary.total_words, result.summary.total_pages, result.summary.total_breaks,
    ))

    if args.input_file == "-":
        output = FORMATTERS["pagination_json"]().format(result)[0]
        sys.stdout.write(output.content + "\n")
        return 0

    input_path = Path(args.input_file)
    output_dir = Path(args.output_dir) if args.output_dir else input_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    for key in formats:
        formatter = FORMATTERS[key]()
        for output in formatter.format(result):
            out_path = output_dir / "{}{}".format(input_path.stem, output.suffix)
            out_path.write_text(output.content, encoding="utf-8")
            _status("Wrote {} to {}".format(formatter.name, out_path))

    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
