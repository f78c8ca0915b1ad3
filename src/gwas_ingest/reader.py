"""Line-oriented reading of summary statistics files.

The parsers in this package work on one line at a time and never touch the
filesystem. This module supplies those lines from plain or gzipped text files,
collects the bounded sample used for format detection, and applies the
skip-or-fail policy for lines that do not parse.
"""

import gzip
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, TypeVar

from .gwas.sniffers import is_header
from .utils.validators import ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

GZIP_MAGIC = b"\x1f\x8b"
DEFAULT_SAMPLE_SIZE = 100


def is_gzipped(path: Path) -> bool:
    """Detect gzip compression from the magic bytes, falling back to the extension."""
    try:
        with open(path, "rb") as f:
            magic = f.read(2)
            if len(magic) >= 2:
                return magic == GZIP_MAGIC
    except OSError:
        pass
    return path.suffix == ".gz"


@contextmanager
def open_text(path: Path) -> Iterator[IO[str]]:
    """Open a plain or gzipped text file for reading."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if is_gzipped(path):
        f = gzip.open(path, "rt")
    else:
        f = open(path)
    try:
        yield f
    finally:
        f.close()


def iter_data_lines(
    lines: Iterable[str],
    comment_char: str = "#",
    delimiter: str = "\t",
) -> Iterator[tuple[int, str]]:
    """Yield (line number, line) for data lines, skipping leading headers and blanks."""
    in_header = True
    for line_num, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        if in_header and is_header(line, comment_char=comment_char, delimiter=delimiter):
            continue
        in_header = False
        yield line_num, line


def read_sample(
    path: Path,
    n_rows: int = DEFAULT_SAMPLE_SIZE,
    comment_char: str = "#",
    delimiter: str = "\t",
) -> tuple[list[str], list[list[str]]]:
    """Read the header row and the first data rows of a file.

    The header is the last header-like line before the first data line, so
    meta lines such as ``##fileformat`` are passed over.

    Args:
        path: File to read (may be gzipped)
        n_rows: Maximum number of data rows to return
        comment_char: Prefix marking comment/header lines
        delimiter: Column delimiter

    Returns:
        Tuple of (header cells, data rows split into cells). The header is
        empty if the file has none.
    """
    if n_rows < 1:
        raise ValueError(f"n_rows must be positive, got {n_rows}")

    header: list[str] = []
    rows: list[list[str]] = []
    with open_text(path) as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            if not rows and is_header(line, comment_char=comment_char, delimiter=delimiter):
                header = line.split(delimiter)
                continue
            rows.append(line.split(delimiter))
            if len(rows) >= n_rows:
                break

    logger.debug(f"Read header with {len(header)} columns and {len(rows)} sample rows from {path}")
    return header, rows


def parse_lines(
    lines: Iterable[tuple[int, str]],
    parser: Callable[[str], T],
    skip_errors: bool = False,
) -> Iterator[T]:
    """Run a line parser over numbered lines.

    Args:
        lines: (line number, text) pairs, e.g. from iter_data_lines
        parser: Any configured line parser
        skip_errors: If True, log and skip lines that fail to parse

    Yields:
        One parsed record per accepted line

    Raises:
        ParseError: If a line fails to parse and skip_errors is False
    """
    skipped = 0
    for line_num, line in lines:
        try:
            yield parser(line)
        except ParseError as e:
            if not skip_errors:
                raise ParseError(f"Error parsing line {line_num}: {e}") from e
            skipped += 1
            logger.warning(f"Skipping line {line_num}: {e}")

    if skipped:
        logger.info(f"Skipped {skipped} lines that could not be parsed")


def parse_file(
    path: Path,
    parser: Callable[[str], T],
    skip_errors: bool = False,
    comment_char: str = "#",
    delimiter: str = "\t",
) -> Iterator[T]:
    """Stream parsed records from a file, skipping leading header lines."""
    with open_text(path) as f:
        yield from parse_lines(
            iter_data_lines(f, comment_char=comment_char, delimiter=delimiter),
            parser,
            skip_errors=skip_errors,
        )
