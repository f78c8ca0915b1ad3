"""Marker and chromosome normalization utilities.

A marker is a single token that encodes chromosome, position and optionally
the ref/alt alleles, in any of the styles emitted by common GWAS tools:

    chr1:762320          1:762320_C/T        1-762320-C-T
    chr1:76792:A:C       10:48698435_A_G     1:762320_C/T_rs75333668

The canonical (EPACTS-style) form is ``chrom:pos`` or ``chrom:pos_ref/alt``.
"""

import re

from .validators import ParseError

REGEX_MARKER = re.compile(
    r"^(?:chr)*([a-zA-Z0-9]+?)[_:-]([0-9]+)[_:|-]?([a-zA-Z0-9]+)?[/_:|-]?([^_]+)?_?(.*)$"
)

_CHR_PREFIX = re.compile(r"^chr", re.IGNORECASE)

MarkerParts = tuple[str, str, str | None, str | None, str | None]


def parse_marker(value: str | None, permissive: bool = False) -> MarkerParts | None:
    """Split a marker into its components.

    Args:
        value: Marker string, e.g. ``chr1:23_A/C``
        permissive: If True, return None instead of raising when no match

    Returns:
        Tuple of (chrom, pos, ref, alt, trailer); absent parts are None

    Raises:
        ParseError: If the value is not a marker and permissive is False
    """
    match = REGEX_MARKER.match(value) if isinstance(value, str) else None
    if match:
        return tuple(group or None for group in match.groups())  # type: ignore[return-value]
    if permissive:
        return None
    raise ParseError(
        f"Could not understand marker format for '{value}'. "
        "Should be of format chr:pos or chr:pos_ref/alt"
    )


def normalize_marker(value: str) -> str:
    """Normalize a variant string to the ``chrom:pos_ref/alt`` format.

    Alleles are only included when both ref and alt are present. Normalizing
    an already normalized marker returns it unchanged.

    Raises:
        ParseError: If the value cannot be parsed as a marker
    """
    chrom, pos, ref, alt, _ = parse_marker(value)
    normalized = f"{chrom}:{pos}"
    if ref and alt:
        normalized += f"_{ref}/{alt}"
    return normalized


def normalize_chromosome(chrom: str) -> str:
    """Strip any 'chr' prefix (case-insensitive) and upper-case the name."""
    return _CHR_PREFIX.sub("", chrom.strip()).upper()


def ensure_not_rsid(chrom: str) -> str:
    """Reject a normalized chromosome that is really an rsID."""
    if chrom.startswith("RS"):
        raise ParseError(f"Invalid chromosome specified: value '{chrom}' is an rsID")
    return chrom
