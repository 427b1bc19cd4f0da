"""Pydantic models for library entities and release candidates."""

from wantarr.models.common import QUALITY_RANKS, Quality, QualityType
from wantarr.models.release import ParseResult
from wantarr.models.sonarr import (
    Episode,
    EpisodeFile,
    HistoryRecord,
    QualityProfile,
    QualityTypeDefinition,
    Series,
)

__all__ = [
    "QUALITY_RANKS",
    "Episode",
    "EpisodeFile",
    "HistoryRecord",
    "ParseResult",
    "Quality",
    "QualityProfile",
    "QualityType",
    "QualityTypeDefinition",
    "Series",
]
