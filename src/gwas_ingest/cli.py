"""gwas-ingest: GWAS summary statistics parsing CLI."""

import json
import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_parser_config, load_sniffer_settings
from .gwas import guess_gwas, make_gwas_parser
from .parsers import make_plink_ld_parser, make_ucsc_bed_parser
from .reader import parse_file, read_sample
from .utils import ConfigurationError, ParseError


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(name="gwas-ingest", help="Parse and auto-detect GWAS summary statistics files")
console = Console()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("gwas_ingest").setLevel(level)


def _jsonable(record: dict[str, Any]) -> dict[str, Any]:
    """Spell out non-finite floats, which strict JSON has no literal for."""
    return {
        key: str(value) if isinstance(value, float) and not math.isfinite(value) else value
        for key, value in record.items()
    }


def _emit_records(
    path: Path,
    parser: Callable[[str], Any],
    skip_errors: bool = False,
    delimiter: str = "\t",
) -> int:
    count = 0
    for record in parse_file(path, parser, skip_errors=skip_errors, delimiter=delimiter):
        print(json.dumps(_jsonable(record.to_dict()), allow_nan=False))
        count += 1
    return count


def _resolve_delimiter(value: str | None) -> str | None:
    if value in ("\\t", "tab"):
        return "\t"
    return value


@app.command()
def sniff(
    file_path: Path = typer.Argument(..., help="GWAS file (plain text or gzipped)"),
    rows: Annotated[
        int | None, typer.Option("--rows", "-n", help="Number of data rows to sample")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    as_json: bool = typer.Option(False, "--json", help="Print the column mapping as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Detect the column layout of a GWAS file."""
    setup_logging(verbose, quiet)

    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    try:
        settings = load_sniffer_settings(config_file)
        header, data_rows = read_sample(file_path, n_rows=rows or settings.sample_size)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    mapping = guess_gwas(header, data_rows)
    if mapping is None:
        console.print(f"[red]Error: Could not determine the format of {file_path}[/red]")
        raise typer.Exit(1)

    if as_json:
        print(json.dumps(mapping, indent=2))
        return

    table = Table(title=f"Detected layout: {file_path.name}")
    table.add_column("Option")
    table.add_column("Value")
    table.add_column("Header")
    for option, value in mapping.items():
        column_name = ""
        if option.endswith("_col") and value - 1 < len(header):
            column_name = header[value - 1]
        table.add_row(option, str(value), column_name)
    console.print(table)


@app.command()
def parse(
    file_path: Path = typer.Argument(..., help="GWAS file (plain text or gzipped)"),
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    auto: bool = typer.Option(False, "--auto", "-a", help="Detect the column layout first"),
    marker_col: Annotated[int | None, typer.Option("--marker-col", help="Marker column")] = None,
    chrom_col: Annotated[int | None, typer.Option("--chrom-col", help="Chromosome column")] = None,
    pos_col: Annotated[int | None, typer.Option("--pos-col", help="Position column")] = None,
    ref_col: Annotated[int | None, typer.Option("--ref-col", help="Ref allele column")] = None,
    alt_col: Annotated[int | None, typer.Option("--alt-col", help="Alt allele column")] = None,
    rsid_col: Annotated[int | None, typer.Option("--rsid-col", help="rsID column")] = None,
    pvalue_col: Annotated[int | None, typer.Option("--pvalue-col", help="P-value column")] = None,
    beta_col: Annotated[int | None, typer.Option("--beta-col", help="Effect size column")] = None,
    stderr_beta_col: Annotated[
        int | None, typer.Option("--stderr-beta-col", help="Effect size standard error column")
    ] = None,
    allele_freq_col: Annotated[
        int | None, typer.Option("--allele-freq-col", help="Allele frequency column")
    ] = None,
    allele_count_col: Annotated[
        int | None, typer.Option("--allele-count-col", help="Allele count column")
    ] = None,
    n_samples_col: Annotated[
        int | None, typer.Option("--n-samples-col", help="Sample size column")
    ] = None,
    neg_log_pvalue: Annotated[
        bool | None,
        typer.Option(
            "--neg-log-pvalue/--raw-pvalue", help="P-value column holds -log10 p-values"
        ),
    ] = None,
    alt_effect: Annotated[
        bool | None,
        typer.Option(
            "--alt-effect/--ref-effect",
            help="Frequency and counts describe the alt allele (default) or the ref allele",
        ),
    ] = None,
    delimiter: Annotated[
        str | None,
        typer.Option("--delimiter", "-d", help="Field delimiter; use 'tab' or '\\t' for tabs"),
    ] = None,
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Skip lines that fail to parse instead of stopping"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Parse a GWAS file and print one JSON record per line.

    The column layout comes from --config, from --auto detection, or from the
    individual column options, which override both.
    """
    setup_logging(verbose, quiet)
    logger = logging.getLogger(__name__)

    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    overrides = {
        name: value
        for name, value in {
            "marker_col": marker_col,
            "chrom_col": chrom_col,
            "pos_col": pos_col,
            "ref_col": ref_col,
            "alt_col": alt_col,
            "rsid_col": rsid_col,
            "pvalue_col": pvalue_col,
            "beta_col": beta_col,
            "stderr_beta_col": stderr_beta_col,
            "allele_freq_col": allele_freq_col,
            "allele_count_col": allele_count_col,
            "n_samples_col": n_samples_col,
            "is_neg_log_pvalue": neg_log_pvalue,
            "is_alt_effect": alt_effect,
            "delimiter": _resolve_delimiter(delimiter),
        }.items()
        if value is not None
    }

    try:
        if auto:
            settings = load_sniffer_settings(config_file)
            header, data_rows = read_sample(
                file_path,
                n_rows=settings.sample_size,
                delimiter=overrides.get("delimiter", "\t"),
            )
            mapping = guess_gwas(header, data_rows)
            if mapping is None:
                console.print(f"[red]Error: Could not determine the format of {file_path}[/red]")
                raise typer.Exit(1)
            logger.info(f"Detected column layout: {mapping}")
            parser = make_gwas_parser(mapping, **overrides)
        elif config_file is not None:
            parser = make_gwas_parser(load_parser_config(config_file, overrides))
        else:
            parser = make_gwas_parser(**overrides)

        count = _emit_records(
            file_path, parser, skip_errors=skip_errors, delimiter=parser.config.delimiter
        )
    except (ConfigurationError, ParseError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    logger.info(f"Parsed {count:,} records from {file_path.name}")


@app.command()
def bed(
    file_path: Path = typer.Argument(..., help="BED file (plain text or gzipped)"),
    raw: bool = typer.Option(False, "--raw", help="Keep values as strings, without normalizing"),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Skip lines that fail to parse instead of stopping"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Parse a UCSC BED file and print one JSON record per line."""
    setup_logging(verbose, quiet)

    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    try:
        _emit_records(file_path, make_ucsc_bed_parser(normalize=not raw), skip_errors)
    except (ParseError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


@app.command()
def ld(
    file_path: Path = typer.Argument(..., help="PLINK --r2 output (plain text or gzipped)"),
    raw: bool = typer.Option(False, "--raw", help="Keep values as strings, without normalizing"),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Skip lines that fail to parse instead of stopping"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Parse a PLINK LD file and print one JSON record per line."""
    setup_logging(verbose, quiet)

    if not file_path.exists():
        console.print(f"[red]Error: File not found: {file_path}[/red]")
        raise typer.Exit(1)

    try:
        _emit_records(file_path, make_plink_ld_parser(normalize=not raw), skip_errors)
    except (ParseError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


if __name__ == "__main__":
    app()
