"""Quality models shared by every part of the decision engine."""

from __future__ import annotations

from enum import Enum
from functools import total_ordering

from pydantic import BaseModel, ConfigDict, Field


@total_ordering
class QualityType(Enum):
    """Quality tier of a release.

    Tiers are ordered by ``QUALITY_RANKS``, never by declaration order or value.
    """

    UNKNOWN = "unknown"
    SDTV = "sdtv"
    DVD = "dvd"
    HDTV = "hdtv"
    WEBDL = "webdl"
    BLURAY720P = "bluray720p"
    BLURAY1080P = "bluray1080p"

    @property
    def rank(self) -> int:
        """Position of this tier in the ranking table."""
        return QUALITY_RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, QualityType):
            return NotImplemented
        return self.rank < other.rank


QUALITY_RANKS: dict[QualityType, int] = {
    QualityType.UNKNOWN: 0,
    QualityType.SDTV: 1,
    QualityType.DVD: 2,
    QualityType.HDTV: 4,
    QualityType.WEBDL: 5,
    QualityType.BLURAY720P: 6,
    QualityType.BLURAY1080P: 7,
}


@total_ordering
class Quality(BaseModel):
    """A quality tier plus the proper flag.

    Ordered by tier first; a proper release sorts above a non-proper one of
    the same tier.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    quality_type: QualityType = Field(alias="qualityType")
    proper: bool = False

    def same_tier(self, other: Quality) -> bool:
        """Check if both qualities share a tier, ignoring the proper flag."""
        return self.quality_type == other.quality_type

    def _sort_key(self) -> tuple[int, bool]:
        return (self.quality_type.rank, self.proper)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Quality):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        suffix = " proper" if self.proper else ""
        return f"{self.quality_type.value}{suffix}"
