"""Pytest configuration and fixtures for gwas-ingest tests."""

import gzip
from pathlib import Path

import pytest

EPACTS_LINES = [
    "##fileformat=EPACTS",
    "#CHROM\tBEGIN\tEND\tMARKER_ID\tNS\tAC\tCALLRATE\tMAF\tPVALUE\tBETA\tSEBETA",
    "1\t762320\t762320\t1:762320_C/T_rs75333668\t3805\t100.00\t1.00000\t0.01314\t0.4271\t0.08034\t0.1012",
    "1\t861808\t861808\t1:861808_G/A_rs13302982\t3805\t2400.0\t1.00000\t0.31530\t0.001\t-0.0403\t0.0211",
    "1\t865628\t865628\t1:865628_G/A_rs41285790\t3805\t57.000\t1.00000\t0.00749\tNA\tNA\tNA",
]

BED_LINES = [
    'track name=pairedReads description="Clone Paired Reads" useScore=1',
    "chr7\t127471196\t127472363\tPos1\t0\t+\t127471196\t127472363\t255,0,0",
    "chr7\t127472363\t127473530\tPos2\t0\t+\t127472363\t127473530\t255,0,0",
    "chr7\t127475864\t127477031\tNeg1\t0\t-\t127475864\t127477031\t0,0,255",
]

PLINK_LD_LINES = [
    "CHR_A\tBP_A\tSNP_A\tCHR_B\tBP_B\tSNP_B\tR2",
    "22\t37470224\t22-37470224-T-C\t22\t37370297\t22-37370297-T-C\t0.000178517",
    "22\t37470224\t22-37470224-T-C\t22\t37370298\t22-37370298-A-G\t0.8",
]


def _write_lines(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def epacts_file(tmp_path: Path) -> Path:
    """EPACTS-style GWAS results with a meta line, a header and three variants."""
    return _write_lines(tmp_path / "epacts.tsv", EPACTS_LINES)


@pytest.fixture
def epacts_gz_file(tmp_path: Path) -> Path:
    """The EPACTS sample, gzip-compressed."""
    path = tmp_path / "epacts.tsv.gz"
    with gzip.open(path, "wt") as f:
        f.write("\n".join(EPACTS_LINES) + "\n")
    return path


@pytest.fixture
def bed_file(tmp_path: Path) -> Path:
    return _write_lines(tmp_path / "intervals.bed", BED_LINES)


@pytest.fixture
def plink_ld_file(tmp_path: Path) -> Path:
    return _write_lines(tmp_path / "ld.tsv", PLINK_LD_LINES)


@pytest.fixture
def parser_config_file(tmp_path: Path) -> Path:
    """TOML parser layout matching the EPACTS sample."""
    path = tmp_path / "gwas_ingest.toml"
    path.write_text(
        "[gwas_ingest.gwas]\n"
        "marker_col = 4\n"
        "pvalue_col = 9\n"
        "beta_col = 10\n"
        "stderr_beta_col = 11\n"
        "\n"
        "[gwas_ingest.sniffer]\n"
        "sample_size = 2\n"
    )
    return path
