"""Reading files line by line and handing each line to short-lived temp files."""

from __future__ import annotations

import argparse
import logging
import sys
import tempfile
import time
from collections.abc import Iterable, Iterator
from typing import TextIO

logger = logging.getLogger(__name__)

DEFAULT_PATHS = ("file1.txt", "file2.txt", "file3.txt")


class FileProcessingError(OSError):
    """Raised when a file cannot be opened or read."""


def read_lines(path: str) -> Iterator[str]:
    """Yield the lines of ``path`` without their line endings.

    The file is closed as soon as iteration ends.
    """
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise FileProcessingError(f"error opening file {path}: {exc}") from exc
    with handle:
        try:
            for line in handle:
                yield line.rstrip("\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileProcessingError(f"error reading file {path}: {exc}") from exc


def process_files(paths: Iterable[str], out: TextIO) -> list[str]:
    """Write every line of each file to ``out``.

    A file that fails is logged and skipped; the failed paths are returned.
    """
    failed = []
    for path in paths:
        try:
            for line in read_lines(path):
                print(line, file=out)
        except FileProcessingError as exc:
            logger.warning("Failed to process %s: %s", path, exc)
            failed.append(path)
    return failed


def _process_line(line: str) -> None:
    with tempfile.TemporaryFile("w+", prefix="temp-line-") as scratch:
        print(line, file=scratch)


def process_large_file(path: str) -> int:
    """Pass each line of ``path`` through its own temporary file.

    Returns the number of lines processed.
    """
    count = 0
    for line in read_lines(path):
        with tempfile.TemporaryFile("w+", prefix="temp-line-") as holder:
            print(line, file=holder)
            _process_line(line)
        count += 1
    return count


def main(argv: list[str] | None = None) -> int:
    """Print the given files, or with ``--large`` run them through temp files."""
    parser = argparse.ArgumentParser(description="Process text files line by line.")
    parser.add_argument("paths", nargs="*", default=list(DEFAULT_PATHS))
    parser.add_argument(
        "--large", action="store_true", help="process each line via a temporary file"
    )
    args = parser.parse_args(argv)

    if args.large:
        for path in args.paths:
            try:
                process_large_file(path)
            except FileProcessingError as exc:
                print(f"Error processing file: {exc}")
                return 1
        print("File processing completed successfully.")
        return 0

    start = time.perf_counter()
    process_files(args.paths, sys.stdout)
    elapsed = time.perf_counter() - start
    print(f"Processed files in {elapsed:.6f}s")
    return 0