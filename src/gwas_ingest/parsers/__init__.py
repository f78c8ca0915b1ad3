"""Parsers for BED intervals and PLINK LD files."""

from .bed import make_ucsc_bed_parser
from .ld import filter_ld_records, find_ld_refvar, make_plink_ld_parser

__all__ = [
    "filter_ld_records",
    "find_ld_refvar",
    "make_plink_ld_parser",
    "make_ucsc_bed_parser",
]
