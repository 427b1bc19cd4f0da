"""In-memory library implementing every lookup the decision engine needs.

A library is built from a snapshot shaped like the Sonarr API, usually loaded
from a JSON file:

    {
      "qualityDefinitions": [{"qualityType": "hdtv", "maxSize": 734003200}],
      "series": [{"id": 1, "title": "The Office", "runtime": 22,
                  "qualityProfile": {"allowed": ["hdtv"], "cutoff": "hdtv"}}],
      "episodes": [{"id": 10, "seriesId": 1, "seasonNumber": 1, "episodeNumber": 1}],
      "history": [{"episodeId": 10, "quality": {"qualityType": "sdtv"}}]
    }
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path  # noqa: TC003 - used at runtime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wantarr.config import ConfigurationError, QualityDefinitionNotFoundError
from wantarr.models.sonarr import Episode, HistoryRecord, QualityTypeDefinition, Series

if TYPE_CHECKING:
    from wantarr.models.common import Quality, QualityType
    from wantarr.models.release import ParseResult

logger = logging.getLogger(__name__)


class LibrarySnapshot(BaseModel):
    """Serialized contents of a library."""

    model_config = ConfigDict(populate_by_name=True)

    series: list[Series] = Field(default_factory=list)
    episodes: list[Episode] = Field(default_factory=list)
    history: list[HistoryRecord] = Field(default_factory=list)
    quality_definitions: list[QualityTypeDefinition] = Field(
        default_factory=list, alias="qualityDefinitions"
    )


class Library:
    """Read-only library lookups over a snapshot.

    Implements SeriesProvider, EpisodeProvider, HistoryProvider and
    QualityTypeProvider. Indexes are built once; lookups never mutate state.
    """

    def __init__(self, snapshot: LibrarySnapshot | None = None) -> None:
        snapshot = snapshot or LibrarySnapshot()
        self._series_by_title: dict[str, Series] = {}
        for series in snapshot.series:
            if series.clean_title in self._series_by_title:
                logger.warning(
                    "Duplicate clean title %r, keeping series %d",
                    series.clean_title,
                    self._series_by_title[series.clean_title].id,
                )
                continue
            self._series_by_title[series.clean_title] = series

        self._episodes: dict[tuple[int, int, int], Episode] = {}
        self._season_episode_numbers: dict[tuple[int, int], list[int]] = defaultdict(list)
        for episode in snapshot.episodes:
            key = (episode.series_id, episode.season_number, episode.episode_number)
            self._episodes[key] = episode
            self._season_episode_numbers[(episode.series_id, episode.season_number)].append(
                episode.episode_number
            )

        self._history: dict[int, list[HistoryRecord]] = defaultdict(list)
        for record in snapshot.history:
            self._history[record.episode_id].append(record)

        self._definitions: dict[QualityType, QualityTypeDefinition] = {
            d.quality_type: d for d in snapshot.quality_definitions
        }

    @classmethod
    def from_file(cls, path: Path) -> Library:
        """Load a library from a JSON snapshot file.

        Args:
            path: Path to the snapshot file

        Returns:
            Library instance

        Raises:
            ConfigurationError: If the file is missing or invalid
        """
        if not path.exists():
            raise ConfigurationError(f"Library file not found: {path}")
        try:
            data = json.loads(path.read_text())
            snapshot = LibrarySnapshot.model_validate(data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid library file {path}: {e}") from e
        except ValidationError as e:
            raise ConfigurationError(f"Invalid library file {path}: {e}") from e
        logger.debug(
            "Loaded library from %s: %d series, %d episodes, %d history records",
            path,
            len(snapshot.series),
            len(snapshot.episodes),
            len(snapshot.history),
        )
        return cls(snapshot)

    def find_series_by_clean_title(self, clean_title: str) -> Series | None:
        """Return the series with this clean title, or None."""
        return self._series_by_title.get(clean_title)

    def get_episodes_for_candidate(
        self,
        candidate: ParseResult,
        series: Series,
        *,
        include_file: bool = True,
    ) -> list[Episode]:
        """Return the episodes matched by a candidate, in candidate order.

        Episode numbers unknown to the library are skipped.
        """
        episodes = []
        for number in candidate.episode_numbers:
            episode = self._episodes.get((series.id, candidate.season_number, number))
            if episode is None:
                logger.debug(
                    "No episode S%02dE%02d for %s", candidate.season_number, number, series.title
                )
                continue
            if not include_file and episode.episode_file is not None:
                episode = episode.model_copy(update={"episode_file": None})
            episodes.append(episode)
        return episodes

    def is_first_or_last_episode_of_season(
        self, series_id: int, season_number: int, episode_number: int
    ) -> bool:
        """Check if the episode number is the lowest or highest of its season."""
        numbers = self._season_episode_numbers.get((series_id, season_number))
        if not numbers:
            return False
        return episode_number in (min(numbers), max(numbers))

    def get_best_quality_in_history(self, episode_id: int) -> Quality | None:
        """Return the highest quality grabbed for an episode, or None."""
        records = self._history.get(episode_id)
        if not records:
            return None
        return max(record.quality for record in records)

    def get_quality_type_definition(self, quality_type: QualityType) -> QualityTypeDefinition:
        """Return the size definition of a tier.

        Raises:
            QualityDefinitionNotFoundError: If the tier has no definition
        """
        try:
            return self._definitions[quality_type]
        except KeyError:
            raise QualityDefinitionNotFoundError(
                f"No quality definition for {quality_type.value}"
            ) from None
