"""Command-line entry point: descriptive statistics for numbers on a stream."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .config import DEFAULT_PRECISION, LOG_LEVELS, NumstatConfig, clamp_precision
from .formatter import render
from .reader import ReaderError, SampleAllocationError, read_samples
from .stats import compute

logger = logging.getLogger(__name__)

EPILOG = """\
statistics calculated:
  count, sum, mean, median
  minimum, maximum, range
  Q1 (25th percentile), Q3 (75th percentile)
  standard deviation (population)

examples:
  %(prog)s data.txt              read from a file
  cat data.txt | %(prog)s        read from stdin
  echo "1 2 3" | %(prog)s        quick calculation
  %(prog)s -j data.txt           JSON output
  %(prog)s -p 2 data.txt         2 decimal places
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="numstat",
        description=(
            "Calculate statistics for numerical data. Reads whitespace separated "
            "numbers from FILE, or from stdin when no FILE is given, and stops at "
            "the first token that is not a number."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        type=Path,
        default=None,
        metavar="FILE",
        help="File to read numbers from (default: stdin).",
    )
    parser.add_argument(
        "-j",
        "--json",
        dest="json_output",
        action="store_true",
        help="Output in JSON format.",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        metavar="N",
        help=f"Decimal precision, 0 to 10 (default: {DEFAULT_PRECISION}).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level for diagnostic output.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> NumstatConfig:
    return NumstatConfig(
        json_output=args.json_output,
        precision=clamp_precision(args.precision),
        input_file=args.input_file,
    )


def run(config: NumstatConfig, out: Optional[TextIO] = None) -> int:
    """Read, summarise and print; return the process exit status."""
    if out is None:
        out = sys.stdout

    try:
        samples = read_samples(config.input_file)
    except SampleAllocationError:
        logger.error("Memory allocation failed")
        return 1
    except ReaderError as exc:
        logger.error(str(exc))
        return 1

    try:
        stats = compute(samples)
    except MemoryError:
        logger.error("Memory allocation failed")
        return 1
    out.write(render(stats, config.precision, json_output=config.json_output))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    return run(config_from_args(args))


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
