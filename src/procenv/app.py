"""procenv - command line application."""

import argparse
import io
import logging
import os
import sys
from pathlib import Path

from procenv import aggregate, report
from procenv.procfs import DEFAULT_PROC_ROOT, EnumerationError
from procenv.scanner import ProcessScanner, ScanConfig, default_workers

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {text}")
    return value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="procenv",
        description="Classify running processes by the value of an environment variable.",
    )
    parser.add_argument("envvar", help="environment variable name")
    parser.add_argument(
        "-d",
        "--detail",
        action="store_true",
        help="list every process with its command line instead of a histogram",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase log verbosity (repeatable)",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=os.environ.get("PROCENV_JOBS"),
        help="worker threads (default: $PROCENV_JOBS or the CPU count)",
    )
    parser.add_argument(
        "--proc-root",
        type=Path,
        default=os.environ.get("PROCENV_PROC_ROOT", str(DEFAULT_PROC_ROOT)),
        help="process information directory (default: $PROCENV_PROC_ROOT or /proc)",
    )
    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at the level selected by -v flags."""
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", stream=sys.stderr)


def run(args: argparse.Namespace) -> int:
    """Scan the process table and print the report. Returns the exit status."""
    config = ScanConfig(
        proc_root=args.proc_root,
        workers=args.jobs if args.jobs is not None else default_workers(),
        detail=args.detail,
    )
    scanner = ProcessScanner(config)

    try:
        records = scanner.scan(args.envvar)
    except EnumerationError as exc:
        logger.error("%s", exc)
        return 1

    if args.detail:
        lines = report.detail_lines(aggregate.detail(records))
    else:
        lines = report.histogram_lines(aggregate.histogram(records))

    try:
        report.write_lines(lines, sys.stdout)
    except (OSError, UnicodeError) as exc:
        logger.error("cannot write output: %s", exc)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the procenv command."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    # Values are not guaranteed to fit the terminal encoding
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="backslashreplace")
    return run(args)
