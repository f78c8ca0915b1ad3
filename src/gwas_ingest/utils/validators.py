"""Input validation utilities and missing-value handling."""

from collections.abc import Iterable
from typing import Any


class ConfigurationError(ValueError):
    """Raised when a parser configuration is contradictory or incomplete."""

    pass


class ParseError(ValueError):
    """Raised when a single input line cannot be parsed."""

    pass


MISSING_VALUES = frozenset(
    {
        "",
        ".",
        "NA",
        "N/A",
        "n/a",
        "nan",
        "-nan",
        "NaN",
        "-NaN",
        "null",
        "NULL",
        "None",
        None,
    }
)


def has(value: Any) -> bool:
    """Check whether a column index was specified (0 counts as specified)."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_missing(value: Any, nulls: frozenset = MISSING_VALUES) -> bool:
    """Check whether a value is one of the missing-data sentinels."""
    try:
        return value in nulls
    except TypeError:
        return False


def missing_to_null(
    values: Iterable[Any],
    nulls: frozenset = MISSING_VALUES,
    placeholder: Any = None,
) -> list[Any]:
    """Convert all missing values to a standardized placeholder.

    Args:
        values: Raw values, usually the cells of one column
        nulls: Set of tokens treated as missing
        placeholder: Value substituted for every missing token

    Returns:
        List with sentinels replaced and all other values passed through
    """
    return [placeholder if is_missing(v, nulls) else v for v in values]
