"""Shared utility modules."""

from .markers import (
    REGEX_MARKER,
    ensure_not_rsid,
    normalize_chromosome,
    normalize_marker,
    parse_marker,
)
from .numeric import (
    parse_allele_frequency,
    parse_pval_to_log,
    to_float,
    to_int,
    to_nullable_float,
)
from .validators import (
    MISSING_VALUES,
    ConfigurationError,
    ParseError,
    has,
    is_missing,
    missing_to_null,
)

__all__ = [
    "MISSING_VALUES",
    "REGEX_MARKER",
    "ConfigurationError",
    "ParseError",
    "ensure_not_rsid",
    "has",
    "is_missing",
    "missing_to_null",
    "normalize_chromosome",
    "normalize_marker",
    "parse_allele_frequency",
    "parse_marker",
    "parse_pval_to_log",
    "to_float",
    "to_int",
    "to_nullable_float",
]
