"""Lookup interfaces the decision engine consumes.

Each protocol exposes only what the engine needs from the persistence layer.
Lookups return empty or None results instead of raising, except for
``get_quality_type_definition`` whose absence is a configuration error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wantarr.models.common import Quality, QualityType
    from wantarr.models.release import ParseResult
    from wantarr.models.sonarr import Episode, QualityTypeDefinition, Series


class SeriesProvider(Protocol):
    """Series lookup by normalized title."""

    def find_series_by_clean_title(self, clean_title: str) -> Series | None:
        """Return the series with this clean title, or None."""
        ...


class EpisodeProvider(Protocol):
    """Episode lookups for a candidate's series."""

    def get_episodes_for_candidate(
        self,
        candidate: ParseResult,
        series: Series,
        *,
        include_file: bool = True,
    ) -> Sequence[Episode]:
        """Return the series' episodes matched by the candidate, possibly none."""
        ...

    def is_first_or_last_episode_of_season(
        self, series_id: int, season_number: int, episode_number: int
    ) -> bool:
        """Check if the episode opens or closes its season."""
        ...


class HistoryProvider(Protocol):
    """Download history lookup."""

    def get_best_quality_in_history(self, episode_id: int) -> Quality | None:
        """Return the best quality grabbed for an episode, or None."""
        ...


class QualityTypeProvider(Protocol):
    """Quality tier metadata lookup."""

    def get_quality_type_definition(self, quality_type: QualityType) -> QualityTypeDefinition:
        """Return the size definition of a tier.

        Raises:
            QualityDefinitionNotFoundError: If the tier has no definition
        """
        ...
