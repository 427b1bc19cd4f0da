"""Release size ceiling heuristics."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wantarr.models.release import ParseResult
    from wantarr.models.sonarr import Series
    from wantarr.providers import EpisodeProvider, QualityTypeProvider

logger = logging.getLogger(__name__)

# Runtime range, in minutes, of hour-long episodes
HOUR_LONG_RUNTIME = (50, 65)


class SizeCalculator:
    """Bounds-check a candidate's size against a per-tier ceiling.

    The tier's nominal maximum size assumes a single half-hour episode. It is
    scaled up for hour-long series, multi-episode releases and single season
    premieres or finales. Multipliers compose multiplicatively.
    """

    def __init__(
        self,
        quality_types: QualityTypeProvider,
        episodes: EpisodeProvider,
    ) -> None:
        """Initialize the size calculator.

        Args:
            quality_types: Lookup for per-tier size definitions
            episodes: Lookup used to detect season premieres and finales
        """
        self._quality_types = quality_types
        self._episodes = episodes

    def max_size(self, candidate: ParseResult, series: Series) -> int:
        """Compute the largest acceptable size for a candidate, in bytes.

        Raises:
            QualityDefinitionNotFoundError: If the candidate's tier has no definition
        """
        definition = self._quality_types.get_quality_type_definition(
            candidate.quality.quality_type
        )
        max_size = definition.max_size

        low, high = HOUR_LONG_RUNTIME
        if low <= series.runtime <= high:
            max_size *= 2

        episode_count = len(candidate.episode_numbers)
        max_size *= episode_count

        if episode_count == 1 and self._episodes.is_first_or_last_episode_of_season(
            series.id, candidate.season_number, candidate.episode_numbers[0]
        ):
            max_size *= 2

        return max_size

    def is_acceptable_size(self, candidate: ParseResult, series: Series) -> bool:
        """Check if the candidate is no larger than its size ceiling.

        Args:
            candidate: The release under evaluation
            series: The series the candidate was matched to

        Returns:
            True if the candidate's size is within the ceiling

        Raises:
            QualityDefinitionNotFoundError: If the candidate's tier has no definition
        """
        max_size = self.max_size(candidate, series)
        if candidate.size > max_size:
            logger.debug(
                "%s is too large: %d bytes, maximum %d bytes", candidate, candidate.size, max_size
            )
            return False
        return True
