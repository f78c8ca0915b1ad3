"""Tests for the UCSC BED parser."""

import pytest

from gwas_ingest.models import BedRecord
from gwas_ingest.parsers.bed import make_ucsc_bed_parser
from gwas_ingest.utils.validators import ParseError

BED_LINE = "chr7\t127471196\t127472363\tPos1\t0\t+\t127471196\t127472363\t255,0,0"


class TestUcscBedParser:
    """Tests for parsing BED lines."""

    def test_normalizes_by_default(self):
        parser = make_ucsc_bed_parser()
        result = parser(BED_LINE)

        assert isinstance(result, BedRecord)
        assert result.to_dict() == {
            "chrom": "7",
            "chromStart": 127471197,
            "chromEnd": 127472363,
            "name": "Pos1",
            "score": 0,
            "strand": "+",
            "thickStart": 127471196,
            "thickEnd": 127472363,
            "itemRgb": "rgb(255,0,0)",
            "blockCount": None,
            "blockSizes": None,
            "blockStarts": None,
        }

    def test_required_fields_missing(self):
        parser = make_ucsc_bed_parser(normalize=True)
        with pytest.raises(ParseError, match="must provide all required"):
            parser("chr12\t51")

    def test_empty_required_field(self):
        parser = make_ucsc_bed_parser()
        with pytest.raises(ParseError, match="must provide all required"):
            parser("chr12\t\t100")

    def test_raw_contents(self):
        parser = make_ucsc_bed_parser(normalize=False)
        result = parser(BED_LINE)

        assert result.to_dict() == {
            "chrom": "chr7",
            "chromStart": "127471196",
            "chromEnd": "127472363",
            "name": "Pos1",
            "score": "0",
            "strand": "+",
            "thickStart": "127471196",
            "thickEnd": "127472363",
            "itemRgb": "255,0,0",
            "blockCount": None,
            "blockSizes": None,
            "blockStarts": None,
        }

    def test_three_column_bed(self):
        result = make_ucsc_bed_parser()("chr1\t0\t100")
        assert result.chrom == "1"
        assert result.chromStart == 1
        assert result.chromEnd == 100
        assert result.name is None
        assert result.score is None

    def test_six_column_bed(self):
        result = make_ucsc_bed_parser()("chr1\t0\t100\tfeature\t500\t-")
        assert result.score == 500
        assert result.strand == "-"
        assert result.thickStart is None
        assert result.itemRgb is None

    def test_dot_is_missing(self):
        result = make_ucsc_bed_parser()("chr1\t0\t100\tfeature\t.\t.")
        assert result.score is None
        assert result.strand is None

    def test_optional_block_fields(self):
        parser = make_ucsc_bed_parser()
        line = (
            "chr7\t127472363\t127473530\tPos2\t0\t+\t127472363\t127473530\t255,0,0\t2\t"
            "567,488,\t0,3512"
        )
        result = parser(line)
        assert result.blockCount == 2
        assert result.blockSizes == [567, 488]
        assert result.blockStarts == [1, 3513]

    def test_block_counts_must_agree(self):
        parser = make_ucsc_bed_parser()
        line = (
            "chr7\t127472363\t127473530\tPos2\t0\t+\t127472363\t127473530\t255,0,0\t2\t"
            "567,488,999\t0,3512"
        )
        with pytest.raises(ParseError, match="same number of items"):
            parser(line)

    def test_non_numeric_start(self):
        with pytest.raises(ParseError):
            make_ucsc_bed_parser()("chr1\tstart\t100")

    def test_non_numeric_start_allowed_in_raw_mode(self):
        assert make_ucsc_bed_parser(normalize=False)("chr1\tstart\t100").chromStart == "start"

    def test_extra_columns_ignored(self):
        line = BED_LINE + "\t2\t567,488\t0,3512\textra"
        assert make_ucsc_bed_parser()(line).blockCount == 2
