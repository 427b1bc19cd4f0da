"""Parsed release candidates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wantarr.models.common import Quality


class ParseResult(BaseModel):
    """A release parsed from an indexer title, waiting for a decision."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    clean_title: str = Field(alias="cleanTitle")
    season_number: int = Field(alias="seasonNumber")
    episode_numbers: tuple[int, ...] = Field(default=(), alias="episodeNumbers")
    quality: Quality
    size: int = Field(default=0, ge=0)
    title: str = ""
    series_title: str = Field(default="", alias="seriesTitle")

    def __str__(self) -> str:
        episodes = "".join(f"E{n:02d}" for n in self.episode_numbers)
        name = self.series_title or self.clean_title
        return f"{name} S{self.season_number:02d}{episodes} [{self.quality}]"
