"""BED file parser.

Parses BED-family files (3-12 columns) according to the widely used UCSC
(quasi-)specification: https://genome.ucsc.edu/FAQ/FAQformat.html#format1

BED line format (tab-separated, 0-based half-open intervals):
chrom  chromStart  chromEnd  name  score  strand  thickStart  thickEnd  itemRgb  blockCount  blockSizes  blockStarts
chr7   127471196   127472363 Pos1  0      +       127471196   127472363 255,0,0

Only data lines are handled; header and track lines must be removed by the
caller.
"""

from collections.abc import Callable

from ..models import BedRecord
from ..utils.markers import normalize_chromosome
from ..utils.numeric import to_float, to_int
from ..utils.validators import ParseError

BED_COLUMNS = (
    "chrom",
    "chromStart",
    "chromEnd",
    "name",
    "score",
    "strand",
    "thickStart",
    "thickEnd",
    "itemRgb",
    "blockCount",
    "blockSizes",
    "blockStarts",
)


def _bed_missing(value: str | None) -> str | None:
    """BED files use '.' as the missing value character."""
    if value is None or value == "" or value == ".":
        return None
    return value


def _bed_int(value: str | None, label: str) -> int | None:
    value = _bed_missing(value)
    return None if value is None else to_int(value, label)


def _bed_int_list(value: str | None, label: str, offset: int = 0) -> list[int] | None:
    """Parse a comma separated list (a trailing comma is allowed) into integers."""
    value = _bed_missing(value)
    if value is None:
        return None
    return [to_int(item, label) + offset for item in value.rstrip(",").split(",")]


def _normalize(tokens: dict[str, str | None]) -> BedRecord:
    score = _bed_missing(tokens["score"])
    item_rgb = _bed_missing(tokens["itemRgb"])

    block_count = _bed_int(tokens["blockCount"], "blockCount")
    block_sizes = _bed_int_list(tokens["blockSizes"], "blockSizes")
    # Block starts are relative to chromStart; shift to 1-based like chromStart
    block_starts = _bed_int_list(tokens["blockStarts"], "blockStarts", offset=1)

    if (
        block_sizes is not None
        and block_starts is not None
        and block_count is not None
        and (len(block_sizes) != block_count or len(block_starts) != block_count)
    ):
        raise ParseError(
            "Block size and start information should provide the same number of items "
            "as in blockCount"
        )

    return BedRecord(
        chrom=normalize_chromosome(tokens["chrom"]),
        # BED is 0-based half-open; convert to 1-based inclusive
        chromStart=to_int(tokens["chromStart"], "chromStart") + 1,
        chromEnd=to_int(tokens["chromEnd"], "chromEnd"),
        name=tokens["name"],
        score=None if score is None else to_float(score, "score"),
        strand=_bed_missing(tokens["strand"]),
        thickStart=_bed_int(tokens["thickStart"], "thickStart"),
        thickEnd=_bed_int(tokens["thickEnd"], "thickEnd"),
        itemRgb=None if item_rgb is None else f"rgb({item_rgb})",
        blockCount=block_count,
        blockSizes=block_sizes,
        blockStarts=block_starts,
    )


def make_ucsc_bed_parser(normalize: bool = True) -> Callable[[str], BedRecord]:
    """Build a parser for one line of a UCSC BED file.

    Args:
        normalize: If True, coerce numbers, strip 'chr' prefixes, and convert
            0-based half-open starts to 1-based inclusive starts. If False,
            return the raw strings.

    Returns:
        Function that parses a single line of text into a BedRecord

    Raises:
        ParseError: (from the returned function) If chrom, chromStart or
            chromEnd is missing, or block information is inconsistent
    """

    def parse(line: str) -> BedRecord:
        # Columns past the 12 standard ones are ignored
        values = line.strip().split("\t")[: len(BED_COLUMNS)]
        if len(values) < 3 or not all(values[:3]):
            raise ParseError(f"Sample data must provide all required BED columns: {line!r}")

        tokens: dict[str, str | None] = dict.fromkeys(BED_COLUMNS)
        tokens.update(zip(BED_COLUMNS, values))

        if not normalize:
            return BedRecord(**tokens)
        try:
            return _normalize(tokens)
        except ParseError as e:
            raise ParseError(f"{e} (line: {line.strip()!r})") from e

    return parse
