"""Data models for GWAS summary statistics."""

from dataclasses import asdict, dataclass, fields
from typing import Any

from ..utils.validators import ConfigurationError, has

COLUMN_FIELDS = (
    "marker_col",
    "chrom_col",
    "pos_col",
    "ref_col",
    "alt_col",
    "rsid_col",
    "pvalue_col",
    "beta_col",
    "stderr_beta_col",
    "allele_freq_col",
    "allele_count_col",
    "n_samples_col",
)


@dataclass(frozen=True)
class GWASParserConfig:
    """Column layout of a GWAS file.

    All column options are 1-indexed (human friendly) column IDs. The variant
    is located either by a single marker column OR by chrom + pos columns.
    Allele frequency is given directly OR as allele count + sample size.
    """

    pvalue_col: int | None = None
    marker_col: int | None = None
    chrom_col: int | None = None
    pos_col: int | None = None
    ref_col: int | None = None
    alt_col: int | None = None
    rsid_col: int | None = None
    beta_col: int | None = None
    stderr_beta_col: int | None = None
    allele_freq_col: int | None = None
    allele_count_col: int | None = None
    n_samples_col: int | None = None
    is_neg_log_pvalue: bool = False
    # Files like METAL, where ref/alt may switch places per line, are not supported
    is_alt_effect: bool = True
    delimiter: str = "\t"

    def __post_init__(self) -> None:
        for name in COLUMN_FIELDS:
            value = getattr(self, name)
            if value is not None and (not has(value) or value < 1):
                raise ConfigurationError(
                    f"{name} must be a 1-based column number, got {value!r}"
                )

        if has(self.marker_col) and (has(self.chrom_col) or has(self.pos_col)):
            raise ConfigurationError("Must specify either marker OR chr + pos")
        if not (has(self.marker_col) or (has(self.chrom_col) and has(self.pos_col))):
            raise ConfigurationError("Must specify how to locate marker")

        if not has(self.pvalue_col):
            raise ConfigurationError("Must specify the pvalue column")

        if has(self.allele_count_col) and has(self.allele_freq_col):
            raise ConfigurationError("Allele count and frequency options are mutually exclusive")
        if has(self.allele_count_col) and not has(self.n_samples_col):
            raise ConfigurationError(
                "To calculate allele frequency from counts, you must also provide n_samples"
            )

        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise ConfigurationError("delimiter must be a non-empty string")

    @classmethod
    def from_mapping(cls, mapping: dict[str, Any], **overrides: Any) -> "GWASParserConfig":
        """Build a config from a column mapping (e.g. sniffer output) plus overrides."""
        options = {**mapping, **overrides}
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ConfigurationError(f"Unknown parser options: {', '.join(sorted(unknown))}")
        return cls(**options)

    def to_dict(self) -> dict[str, Any]:
        """Return only the options that differ from None."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class GWASRecord:
    """One parsed line of a GWAS file, in the field names used for plotting."""

    chromosome: str
    position: int
    ref_allele: str | None
    alt_allele: str | None
    variant: str
    rsid: str | None
    log_pvalue: float | None
    beta: float | None = None
    stderr_beta: float | None = None
    alt_allele_freq: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
