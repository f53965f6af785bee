"""
Command-line front end.

Usage:
    fixerr data.csv -o output.csv [--delimiter semicolon] [--no-headers [-c 7]] [-v]

Exit codes:
    0 - output written
    1 - input missing, bad configuration, malformed CSV or I/O failure
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, TextIO

from .detect import resolve_column_count
from .errors import FixerrError
from .models import RepairConfig
from .reconstruct import Stats, reconstruct_records
from .rules import DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_FILE, Delimiter, HeaderMode
from .writer import write_output_csv

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 52


def prompt_column_count(stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stdout.write("Enter expected number of columns: ")
    stdout.flush()
    return resolve_column_count(stdin.readline())


def format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{int(seconds * 1000)} ms"
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}m {secs}s"


def print_processing_header(config: RepairConfig) -> None:
    print(SEPARATOR)
    print("PROCESSING CSV FILE")
    print(SEPARATOR)
    print(f"Input File      : {config.input_file}")
    print(f"Output File     : {config.output_file}")
    print(f"Delimiter       : {config.delimiter.name.title()}")
    print(f"Header Mode     : {config.header_mode.value}")
    print(SEPARATOR)


def print_summary(stats: Stats, total_records: int, output_file: str) -> None:
    print(SEPARATOR)
    print("SUMMARY")
    print(SEPARATOR)
    print(f"Total lines read       : {stats.total_rows}")
    print(f"Fixed/Merged rows      : {stats.fixed_rows}")
    print(f"Discarded rows         : {stats.removed_rows}")
    print(f"Total valid records    : {total_records}")
    print(f"Success Rate           : {stats.success_rate:.1f}%")
    print(SEPARATOR)
    print(f"Output written to: {output_file}")


def process_csv(config: RepairConfig) -> Stats:
    if not Path(config.input_file).exists():
        raise FileNotFoundError(f"Input file '{config.input_file}' not found")

    print_processing_header(config)
    stats = Stats()
    total_start = time.perf_counter()

    print("Phase 1: Analyzing and reconstructing records...")
    start = time.perf_counter()
    records = reconstruct_records(
        config.input_file,
        config.header_mode,
        config.delimiter,
        stats,
        config.expected_columns,
    )
    print(f"   Processing Time: {format_elapsed(time.perf_counter() - start)}")

    print("Phase 2: Writing cleaned CSV...")
    start = time.perf_counter()
    write_output_csv(config.output_file, records, config.delimiter)
    print(f"   Writing Time: {format_elapsed(time.perf_counter() - start)}")
    print(f"   Total Time: {format_elapsed(time.perf_counter() - total_start)}")

    print_summary(stats, len(records), config.output_file)
    return stats


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fixerr", description="Repair CSV records split by unescaped line breaks.")
    ap.add_argument("input", nargs="?", default=DEFAULT_INPUT_FILE, help=f"input CSV (default: {DEFAULT_INPUT_FILE})")
    ap.add_argument("-o", "--output", default=DEFAULT_OUTPUT_FILE, help=f"output CSV (default: {DEFAULT_OUTPUT_FILE})")
    ap.add_argument(
        "-d",
        "--delimiter",
        default="comma",
        choices=[d.name.lower() for d in Delimiter],
        help="field delimiter for input and output",
    )
    ap.add_argument("--no-headers", action="store_true", help="first row is data, not a header")
    ap.add_argument("-c", "--columns", default=None, help="expected column count (no-headers mode)")
    ap.add_argument("-v", "--verbose", action="store_true", help="log each merge and discard")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.columns is not None and not args.no_headers:
        parser.error("-c/--columns only applies with --no-headers")
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        header_mode = HeaderMode.from_bool(not args.no_headers)
        expected_columns = None
        if header_mode is HeaderMode.NO_HEADERS:
            if args.columns is not None:
                expected_columns = resolve_column_count(args.columns)
            else:
                expected_columns = prompt_column_count()

        config = RepairConfig(
            delimiter=Delimiter.parse(args.delimiter),
            header_mode=header_mode,
            input_file=args.input,
            output_file=args.output,
            expected_columns=expected_columns,
        )
        process_csv(config)
    except (FixerrError, OSError) as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"Processing failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
