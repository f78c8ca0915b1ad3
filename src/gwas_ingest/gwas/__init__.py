"""GWAS summary statistics parsing and format detection."""

from .models import GWASParserConfig, GWASRecord
from .parser import GWASLineParser, make_gwas_parser
from .sniffers import (
    AvailableColumns,
    find_column,
    get_chrom_pos_ref_alt_columns,
    get_effect_size_columns,
    get_pval_column,
    guess_gwas,
    is_header,
    levenshtein,
)

__all__ = [
    "AvailableColumns",
    "GWASLineParser",
    "GWASParserConfig",
    "GWASRecord",
    "find_column",
    "get_chrom_pos_ref_alt_columns",
    "get_effect_size_columns",
    "get_pval_column",
    "guess_gwas",
    "is_header",
    "levenshtein",
    "make_gwas_parser",
]
