"""Numeric transformations for summary statistics.

P-values are reported on the -log10 scale. Very small p-values (e.g.
``1.93e-780``) underflow to 0.0 when converted to a float, so the log is
recovered from the original string in that case.
"""

import math
import re
from typing import Any

from .validators import ConfigurationError, ParseError, is_missing

REGEX_PVAL = re.compile(r"([\d.-]+)([\sxeE]*)([0-9-]*)")


def to_float(value: Any, label: str = "numeric") -> float:
    """Convert a raw value to float, raising ParseError on failure."""
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"Invalid {label} value '{value}'") from e


def to_int(value: Any, label: str = "integer") -> int:
    """Convert a raw value to int, accepting integral floats like '1e3'."""
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    number = to_float(value, label)
    if not number.is_integer():
        raise ParseError(f"Invalid {label} value '{value}'")
    return int(number)


def to_nullable_float(value: Any, label: str = "numeric") -> float | None:
    """Convert a raw value to float, mapping missing-value sentinels to None."""
    if is_missing(value):
        return None
    return to_float(value, label)


def _log_from_string(value: str) -> float:
    """Compute -log10 directly from the mantissa and exponent of a p-value string."""
    match = REGEX_PVAL.search(value)
    if not match:
        raise ParseError(f"Invalid p-value '{value}'")

    base = to_float(match.group(1), "p-value mantissa")
    exponent = to_int(match.group(3), "p-value exponent") if match.group(3) else 0

    if base == 0:
        return math.inf
    if base < 0:
        raise ParseError(f"p value is not in the allowed range: '{value}'")
    try:
        return -(math.log10(base) + exponent)
    except OverflowError:
        # exponent too large to convert to float
        if exponent < 0:
            return math.inf
        raise ParseError(f"p value is not in the allowed range: '{value}'") from None


def parse_pval_to_log(value: Any, is_neg_log: bool = False) -> float | None:
    """Parse (and validate) a p-value and return it on the -log10 scale.

    Args:
        value: Raw p-value (or -log10 p-value) as read from the file
        is_neg_log: If True, the value is already -log10 transformed

    Returns:
        The -log10 p-value; None if value is None; inf for a literal "0"

    Raises:
        ParseError: If the value is not numeric or a p-value is outside [0, 1]
    """
    if value is None:
        return None

    val = to_float(value, "p-value")
    if is_neg_log:
        return val

    if math.isnan(val) or val < 0 or val > 1:
        raise ParseError(f"p value is not in the allowed range: '{value}'")

    if val == 0:
        # A literal "0" means the source data already lost precision
        if value == "0":
            return math.inf
        return _log_from_string(str(value))

    return -math.log10(val)


def parse_allele_frequency(
    freq: Any = None,
    allele_count: Any = None,
    n_samples: Any = None,
    is_alt_effect: bool = True,
) -> float | None:
    """Compute the alt allele frequency from a frequency or from allele counts.

    Args:
        freq: Frequency as given in the file
        allele_count: Allele count (mutually exclusive with freq)
        n_samples: Number of samples, required with allele_count
        is_alt_effect: If False, the source frequency refers to the ref allele

    Returns:
        Frequency oriented to the alt allele, or None if data is missing

    Raises:
        ConfigurationError: If both freq and allele_count are given
        ParseError: If the resulting frequency is outside [0, 1]
    """
    if freq is not None and allele_count is not None:
        raise ConfigurationError("Frequency and allele count options are mutually exclusive")

    if freq is None:
        if is_missing(allele_count) or is_missing(n_samples):
            return None
        count = to_float(allele_count, "allele count")
        samples = to_float(n_samples, "sample size")
        if samples == 0:
            raise ParseError("Cannot compute allele frequency with n_samples of 0")
        result = count / samples / 2
    elif is_missing(freq):
        return None
    else:
        result = to_float(freq, "allele frequency")

    if math.isnan(result) or result < 0 or result > 1:
        raise ParseError(f"Allele frequency is not in the allowed range: {result}")

    if not is_alt_effect:
        return 1 - result
    return result
