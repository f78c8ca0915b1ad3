"""gwas-ingest: parse and auto-detect GWAS summary statistics files."""

__version__ = "0.1.0"

from .gwas import GWASParserConfig, GWASRecord, guess_gwas, make_gwas_parser
from .models import BedRecord, LdRecord
from .parsers import make_plink_ld_parser, make_ucsc_bed_parser
from .utils import ConfigurationError, ParseError

__all__ = [
    "__version__",
    "BedRecord",
    "ConfigurationError",
    "GWASParserConfig",
    "GWASRecord",
    "LdRecord",
    "ParseError",
    "guess_gwas",
    "make_gwas_parser",
    "make_plink_ld_parser",
    "make_ucsc_bed_parser",
]
