"""Sniffers: auto detect file format and parsing options for GWAS files.

Detection runs in three steps over the header and a small sample of rows:

1. Find a p-value OR -log10 p-value column whose sample values parse
2. Find a marker column, OR separate chrom/pos (and optional ref/alt) columns
3. Find optional effect size (beta) and standard error columns

Each step claims the columns it uses, so later steps cannot reuse them. The
result is a column mapping with 1-based column numbers, suitable for
``make_gwas_parser``, or None if the format could not be determined.

Synonym lists are drawn from Encore (AssocResultReader) and PheWeb.
"""

import logging
import math
import re
from collections.abc import Sequence
from typing import Any

from ..utils.markers import parse_marker
from ..utils.numeric import parse_pval_to_log
from ..utils.validators import ParseError, is_missing, missing_to_null

logger = logging.getLogger(__name__)

LOGPVALUE_FIELDS = ["neg_log_pvalue", "log_pvalue", "log_pval", "logpvalue"]
PVALUE_FIELDS = ["pvalue", "p.value", "p-value", "pval", "p_score", "p", "p_value"]

MARKER_FIELDS = ["snpid", "marker", "markerid", "snpmarker", "chr:position"]
CHR_FIELDS = ["chrom", "chr", "chromosome"]
POS_FIELDS = ["position", "pos", "begin", "beg", "bp", "end", "ps", "base_pair_location"]

# Order matters: ambiguous names (allele1) are considered for ref before alt.
# Which of A1/A2 is ref vs effect differs between tools; callers may override.
REF_FIELDS = ["a1", "ref", "reference", "allele0", "allele1"]
ALT_FIELDS = ["a2", "alt", "alternate", "allele1", "allele2"]

BETA_FIELDS = ["beta", "effect_size", "alt_effsize", "effect"]
STDERR_BETA_FIELDS = ["stderr_beta", "stderr", "sebeta", "effect_size_sd", "se", "standard_error"]

_LEADING_COMMENT = re.compile(r"^#+")


class AvailableColumns:
    """Header names that have not yet been claimed by a detection step.

    Claiming a column returns a new instance with that column masked out;
    the original is never modified.
    """

    __slots__ = ("_names",)

    def __init__(self, names: Sequence[str | None]):
        self._names = tuple(names)

    @classmethod
    def from_header(cls, header_row: Sequence[str | None]) -> "AvailableColumns":
        """Lower-case header names and strip leading comment marks."""
        names = [None if name is None else str(name).lower() for name in header_row]
        if names and names[0]:
            names[0] = _LEADING_COMMENT.sub("", names[0])
        return cls(names)

    @property
    def names(self) -> tuple[str | None, ...]:
        return self._names

    def claim(self, *indices: int) -> "AvailableColumns":
        """Return a copy with the given 0-based columns removed from consideration."""
        claimed = set(indices)
        return AvailableColumns(
            [None if i in claimed else name for i, name in enumerate(self._names)]
        )

    def find(self, synonyms: Sequence[str], threshold: int = 2) -> int | None:
        return find_column(synonyms, self._names, threshold)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"AvailableColumns({list(self._names)!r})"


def _is_numeric(value: Any) -> bool:
    if is_missing(value):
        return True
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def is_header(row: str, comment_char: str = "#", delimiter: str = "\t") -> bool:
    """Guess whether a line of text is a header/comment rather than data.

    A line is a header if it starts with the comment marker, or if none of its
    cells are numeric (missing-value sentinels count as data).
    """
    return row.startswith(comment_char) or not any(
        _is_numeric(item) for item in row.rstrip("\r\n").split(delimiter)
    )


def levenshtein(a: str, b: str) -> int:
    """Compute the edit distance between two strings.

    Used to find the single best column name that matches a set of synonyms.
    """
    # matrix[j][i] is the distance between b[:j] and a[:i]
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]
    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            indicator = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,  # deletion
                matrix[j - 1][i] + 1,  # insertion
                matrix[j - 1][i - 1] + indicator,  # substitution
            )
    return matrix[len(b)][len(a)]


def find_column(
    column_synonyms: Sequence[str],
    header_names: Sequence[str | None],
    threshold: int = 2,
) -> int | None:
    """Return the index of the header that best matches any synonym.

    Headers set to None are skipped; this is how claimed columns are excluded.
    When two headers score equally, the first one wins.

    Args:
        column_synonyms: Acceptable names for the column
        header_names: Header row (already lower-cased by the caller)
        threshold: Tolerance for fuzzy matching (number of edits)

    Returns:
        0-based index of the best matching column, or None if no match
    """
    best_score = threshold + 1
    best_match = None
    for i, header in enumerate(header_names):
        if header is None:
            continue
        score = min(levenshtein(header, synonym) for synonym in column_synonyms)
        if score < best_score:
            best_score = score
            best_match = i
    return best_match


def _column_values(data_rows: Sequence[Sequence[Any]], col: int) -> list[Any]:
    return [row[col] if col < len(row) else None for row in data_rows]


def _validate_pvalues(col: int, data_rows: Sequence[Sequence[Any]], is_log: bool) -> bool:
    cleaned = missing_to_null(_column_values(data_rows, col))
    try:
        values = [parse_pval_to_log(p, is_log) for p in cleaned]
    except ParseError:
        return False
    return all(v is None or not math.isnan(v) for v in values)


def _validate_numeric(col: int, data_rows: Sequence[Sequence[Any]]) -> bool:
    for value in missing_to_null(_column_values(data_rows, col)):
        if value is None:
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(number):
            return False
    return True


def get_pval_column(
    columns: AvailableColumns | Sequence[str | None],
    data_rows: Sequence[Sequence[Any]],
) -> dict[str, Any] | None:
    """Find the p-value column, preferring -log10 p-values.

    Returns:
        ``{"pvalue_col": n, "is_neg_log_pvalue": bool}`` (1-based), or None
    """
    if not isinstance(columns, AvailableColumns):
        columns = AvailableColumns(columns)

    log_p_col = columns.find(LOGPVALUE_FIELDS)
    if log_p_col is not None and _validate_pvalues(log_p_col, data_rows, True):
        return {"pvalue_col": log_p_col + 1, "is_neg_log_pvalue": True}

    p_col = columns.find(PVALUE_FIELDS)
    if p_col is not None and _validate_pvalues(p_col, data_rows, False):
        return {"pvalue_col": p_col + 1, "is_neg_log_pvalue": False}

    logger.debug("No column with valid p-values found")
    return None


def get_chrom_pos_ref_alt_columns(
    columns: AvailableColumns | Sequence[str | None],
    data_rows: Sequence[Sequence[Any]],
) -> dict[str, int] | None:
    """Find the columns that identify the variant.

    Tries a single marker column first; otherwise chrom and pos must both be
    found, with ref and alt optional.

    Returns:
        ``{"marker_col": n}`` or ``{"chrom_col": n, "pos_col": n, ...}``
        (1-based), or None
    """
    if not isinstance(columns, AvailableColumns):
        columns = AvailableColumns(columns)

    marker_col = columns.find(MARKER_FIELDS)
    if marker_col is not None and data_rows and all(
        parse_marker(value, permissive=True) for value in _column_values(data_rows, marker_col)
    ):
        return {"marker_col": marker_col + 1}

    find = [
        ("chrom_col", CHR_FIELDS, True),
        ("pos_col", POS_FIELDS, True),
        ("ref_col", REF_FIELDS, False),
        ("alt_col", ALT_FIELDS, False),
    ]
    config: dict[str, int] = {}
    for col_name, choices, is_required in find:
        col = columns.find(choices)
        if col is None:
            if is_required:
                logger.debug(f"Could not find a column for {col_name}")
                return None
            continue
        config[col_name] = col + 1
        columns = columns.claim(col)
    return config


def get_effect_size_columns(
    columns: AvailableColumns | Sequence[str | None],
    data_rows: Sequence[Sequence[Any]],
) -> dict[str, int]:
    """Find beta and stderr_beta columns (exact name matches only).

    Returns:
        Dict with any of ``beta_col`` / ``stderr_beta_col`` (1-based); may be empty
    """
    if not isinstance(columns, AvailableColumns):
        columns = AvailableColumns(columns)

    result: dict[str, int] = {}
    beta_col = columns.find(BETA_FIELDS, threshold=0)
    if beta_col is not None and _validate_numeric(beta_col, data_rows):
        result["beta_col"] = beta_col + 1
        columns = columns.claim(beta_col)

    stderr_beta_col = columns.find(STDERR_BETA_FIELDS, threshold=0)
    if stderr_beta_col is not None and _validate_numeric(stderr_beta_col, data_rows):
        result["stderr_beta_col"] = stderr_beta_col + 1
    return result


def guess_gwas(
    header_row: Sequence[str | None],
    data_rows: Sequence[Sequence[Any]],
) -> dict[str, Any] | None:
    """Guess parser options from a header row and a sample of data rows.

    Args:
        header_row: Column names
        data_rows: Sample rows, already split into cells

    Returns:
        A column mapping (1-based columns), or None if the format could not be
        determined. Never raises for unrecognized input.
    """
    columns = AvailableColumns.from_header(header_row)

    pval_config = get_pval_column(columns, data_rows)
    if not pval_config:
        return None
    columns = columns.claim(pval_config["pvalue_col"] - 1)

    position_config = get_chrom_pos_ref_alt_columns(columns, data_rows)
    if not position_config:
        return None
    columns = columns.claim(*(col - 1 for col in position_config.values()))

    beta_config = get_effect_size_columns(columns, data_rows)

    mapping = {**pval_config, **position_config, **beta_config}
    logger.debug(f"Detected GWAS column mapping: {mapping}")
    return mapping
