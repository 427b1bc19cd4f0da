"""Library entities: series, episodes, history and quality definitions.

Field aliases follow the Sonarr API so library snapshots can be written in the
same camelCase shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wantarr.models.common import Quality, QualityType


class _LibraryModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class QualityProfile(_LibraryModel):
    """Allowed quality tiers for a series and the cutoff that stops upgrades."""

    name: str = ""
    allowed: frozenset[QualityType]
    cutoff: QualityType

    @model_validator(mode="after")
    def _check_cutoff(self) -> QualityProfile:
        if not self.allowed:
            return self
        if self.cutoff not in self.allowed and self.cutoff <= max(self.allowed):
            raise ValueError(
                f"cutoff {self.cutoff.value} must be an allowed tier or above all of them"
            )
        return self


class Series(_LibraryModel):
    """A tracked series."""

    id: int
    title: str
    clean_title: str = Field(default="", alias="cleanTitle")
    monitored: bool = True
    runtime: int = 0
    quality_profile: QualityProfile = Field(alias="qualityProfile")

    @model_validator(mode="before")
    @classmethod
    def _fill_clean_title(cls, data: Any) -> Any:
        if isinstance(data, dict) and not (data.get("cleanTitle") or data.get("clean_title")):
            from wantarr.parser import normalize_title

            data = {**data, "cleanTitle": normalize_title(str(data.get("title", "")))}
        return data


class EpisodeFile(_LibraryModel):
    """The file currently held for an episode."""

    id: int = 0
    quality: Quality
    size: int = 0
    path: str | None = None


class Episode(_LibraryModel):
    """An episode of a series."""

    id: int
    series_id: int = Field(alias="seriesId")
    season_number: int = Field(alias="seasonNumber")
    episode_number: int = Field(alias="episodeNumber")
    title: str = ""
    ignored: bool = False
    episode_file: EpisodeFile | None = Field(default=None, alias="episodeFile")


class HistoryRecord(_LibraryModel):
    """A prior grab of an episode."""

    episode_id: int = Field(alias="episodeId")
    quality: Quality
    source_title: str = Field(default="", alias="sourceTitle")
    date: datetime | None = None


class QualityTypeDefinition(_LibraryModel):
    """Nominal maximum size, in bytes, of a standard-length episode at a tier."""

    quality_type: QualityType = Field(alias="qualityType")
    max_size: int = Field(alias="maxSize", ge=0)
