"""Parsers for user-specified LD.

Reads the output of plink v1.9 --r2 calculations relative to one (or a few)
target SNPs. See https://www.cog-genomics.org/plink/1.9/ld

PLINK LD format (tab-separated, after reformatting to tabs):
CHR_A  BP_A      SNP_A            CHR_B  BP_B      SNP_B            R2
22     37470224  22-37470224-T-C  22     37370297  22-37370297-T-C  0.000178517

SNP_A and SNP_B are taken from the ID column of the source VCF.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..models import LdRecord
from ..utils.markers import normalize_chromosome, normalize_marker
from ..utils.numeric import to_float, to_int
from ..utils.validators import ParseError

logger = logging.getLogger(__name__)

PLINK_LD_COLUMNS = 7


def make_plink_ld_parser(normalize: bool = True) -> Callable[[str], LdRecord]:
    """Build a parser for one line of PLINK --r2 output.

    Args:
        normalize: If True, strip 'chr' prefixes, convert variants to the
            ``chrom:pos_ref/alt`` format, and coerce numbers

    Returns:
        Function that parses a single line of text into an LdRecord
    """

    def parse(line: str) -> LdRecord:
        values = line.strip().split("\t")
        if len(values) < PLINK_LD_COLUMNS:
            raise ParseError(
                f"Expected {PLINK_LD_COLUMNS} PLINK LD columns, got {len(values)}: {line!r}"
            )
        chrom1, pos1, variant1, chrom2, pos2, variant2, correlation = values[:PLINK_LD_COLUMNS]

        if not normalize:
            return LdRecord(chrom1, pos1, variant1, chrom2, pos2, variant2, correlation)

        try:
            return LdRecord(
                chromosome1=normalize_chromosome(chrom1),
                position1=to_int(pos1, "position1"),
                variant1=normalize_marker(variant1),
                chromosome2=normalize_chromosome(chrom2),
                position2=to_int(pos2, "position2"),
                variant2=normalize_marker(variant2),
                correlation=to_float(correlation, "correlation"),
            )
        except ParseError as e:
            raise ParseError(f"{e} (line: {line.strip()!r})") from e

    return parse


def _get(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def find_ld_refvar(records: Iterable[Any], refvar: str | None = None) -> str | None:
    """Choose the reference variant for LD, in normalized marker format.

    Uses the given refvar if provided, otherwise the association record with
    the highest -log10 p-value.

    Args:
        records: Association records with ``variant`` and ``log_pvalue`` fields
        refvar: Optional user-selected reference variant

    Returns:
        The normalized reference variant, or None if there are no records

    Raises:
        ParseError: If no reference variant with a usable marker can be found
    """
    records = list(records)
    if not records:
        return None

    if refvar is None:
        best_logp = 0.0
        for record in records:
            log_pvalue = _get(record, "log_pvalue")
            if log_pvalue is not None and log_pvalue > best_logp:
                best_logp = log_pvalue
                refvar = _get(record, "variant")
        logger.debug(f"Most significant variant for LD: {refvar} (-log10 p={best_logp})")

    if not refvar:
        raise ParseError("Could not find LD for a missing or incomplete marker format")
    return normalize_marker(refvar)


def filter_ld_records(records: Iterable[Any], refvar: str) -> list[Any]:
    """Keep only LD rows computed relative to the reference variant.

    A single PLINK LD file may hold several reference variants (SNP_A) in the
    same region.
    """
    return [record for record in records if _get(record, "variant1") == refvar]
