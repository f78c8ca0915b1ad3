"""Line parser for GWAS summary statistics files.

A parser is configured once from a column layout and then called on each line
of text. It outputs records with the field names expected by association
plots (chromosome, position, variant, log_pvalue, ...).
"""

import logging
from typing import Any

from ..utils.markers import ensure_not_rsid, normalize_chromosome, parse_marker
from ..utils.numeric import (
    parse_allele_frequency,
    parse_pval_to_log,
    to_int,
    to_nullable_float,
)
from ..utils.validators import ParseError, has, is_missing
from .models import GWASParserConfig, GWASRecord

logger = logging.getLogger(__name__)


def _normalize_rsid(value: str | None) -> str | None:
    if is_missing(value):
        return None
    rsid = value.strip().lower()
    if not rsid.startswith("rs"):
        rsid = f"rs{rsid}"
    return rsid


def _normalize_allele(value: str | None) -> str | None:
    if is_missing(value):
        return None
    return value.upper()


class GWASLineParser:
    """Turns one line of a GWAS file into a GWASRecord.

    The configuration is validated when it is built and never re-checked here.
    Instances hold no per-line state, so one parser may be shared freely.
    """

    __slots__ = ("config",)

    def __init__(self, config: GWASParserConfig):
        self.config = config

    def __call__(self, line: str) -> GWASRecord:
        return self.parse_line(line)

    def __repr__(self) -> str:
        return f"GWASLineParser({self.config!r})"

    def parse_line(self, line: str) -> GWASRecord:
        """Parse a single line of text.

        Raises:
            ParseError: If a required field is missing or a value is invalid
        """
        fields = line.rstrip("\r\n").split(self.config.delimiter)
        try:
            return self._parse_fields(fields)
        except ParseError as e:
            raise ParseError(f"{e} (line: {line.rstrip()!r})") from e

    def _parse_fields(self, fields: list[str]) -> GWASRecord:
        config = self.config

        def get_value(col: int) -> str:
            if col > len(fields):
                raise ParseError(f"Line has {len(fields)} columns, expected at least {col}")
            return fields[col - 1]

        ref = alt = None
        if has(config.marker_col):
            chrom, pos, ref, alt, _ = parse_marker(get_value(config.marker_col))
        else:
            chrom = get_value(config.chrom_col)
            pos = get_value(config.pos_col)
            if is_missing(chrom):
                raise ParseError("chromosome is required")

        chrom = ensure_not_rsid(normalize_chromosome(chrom))
        position = to_int(pos, "position")
        if position < 1:
            raise ParseError(f"Invalid position value: {pos}")

        if has(config.ref_col):
            ref = get_value(config.ref_col)
        if has(config.alt_col):
            alt = get_value(config.alt_col)
        ref = _normalize_allele(ref)
        alt = _normalize_allele(alt)

        rsid = _normalize_rsid(get_value(config.rsid_col)) if has(config.rsid_col) else None

        raw_pvalue = get_value(config.pvalue_col)
        log_pvalue = parse_pval_to_log(
            None if is_missing(raw_pvalue) else raw_pvalue, config.is_neg_log_pvalue
        )

        beta = None
        if has(config.beta_col):
            beta = to_nullable_float(get_value(config.beta_col), "beta")
        stderr_beta = None
        if has(config.stderr_beta_col):
            stderr_beta = to_nullable_float(get_value(config.stderr_beta_col), "stderr_beta")

        alt_allele_freq = None
        if has(config.allele_freq_col):
            alt_allele_freq = parse_allele_frequency(
                freq=get_value(config.allele_freq_col),
                is_alt_effect=config.is_alt_effect,
            )
        elif has(config.allele_count_col):
            alt_allele_freq = parse_allele_frequency(
                allele_count=get_value(config.allele_count_col),
                n_samples=get_value(config.n_samples_col),
                is_alt_effect=config.is_alt_effect,
            )

        variant = f"{chrom}:{position}"
        if ref and alt:
            variant += f"_{ref}/{alt}"

        return GWASRecord(
            chromosome=chrom,
            position=position,
            ref_allele=ref,
            alt_allele=alt,
            variant=variant,
            rsid=rsid,
            log_pvalue=log_pvalue,
            beta=beta,
            stderr_beta=stderr_beta,
            alt_allele_freq=alt_allele_freq,
        )


def make_gwas_parser(
    config: GWASParserConfig | dict[str, Any] | None = None,
    **options: Any,
) -> GWASLineParser:
    """Build a line parser from a column layout.

    Args:
        config: A GWASParserConfig, or a column mapping such as sniffer output
        **options: Individual parser options; override values from config

    Returns:
        A GWASLineParser, callable on one line of text at a time

    Raises:
        ConfigurationError: If the column layout is contradictory or incomplete

    Example:
        >>> parser = make_gwas_parser(marker_col=3, pvalue_col=12)
        >>> parser(line).variant
        '1:76792_A/C'
    """
    if config is None:
        config = GWASParserConfig.from_mapping(options)
    elif isinstance(config, dict):
        config = GWASParserConfig.from_mapping(config, **options)
    elif options:
        config = GWASParserConfig.from_mapping(config.to_dict(), **options)

    logger.debug(f"Built GWAS parser with options {config.to_dict()}")
    return GWASLineParser(config)
