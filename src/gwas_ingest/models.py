"""Data models for BED intervals and PLINK LD records."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class BedRecord:
    """Represents a single BED line (3 required + 9 optional columns).

    Field names follow the UCSC BED specification. Values are raw strings
    unless the parser was asked to normalize them.
    """

    chrom: str
    chromStart: int | str
    chromEnd: int | str
    name: str | None = None
    score: float | str | None = None
    strand: str | None = None
    thickStart: int | str | None = None
    thickEnd: int | str | None = None
    itemRgb: str | None = None
    blockCount: int | str | None = None
    blockSizes: list[int] | str | None = None
    blockStarts: list[int] | str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LdRecord:
    """Represents one pairwise LD value from PLINK --r2 output."""

    chromosome1: str
    position1: int | str
    variant1: str
    chromosome2: str
    position2: int | str
    variant2: str
    correlation: float | str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
