"""Monitoring gate for release candidates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wantarr.results import MonitoringResult, Rejection

if TYPE_CHECKING:
    from wantarr.models.release import ParseResult
    from wantarr.providers import EpisodeProvider, SeriesProvider

logger = logging.getLogger(__name__)


class MonitoringChecker:
    """Decide whether a candidate belongs to something being tracked."""

    def __init__(self, series: SeriesProvider, episodes: EpisodeProvider) -> None:
        self._series = series
        self._episodes = episodes

    def is_monitored(self, candidate: ParseResult) -> MonitoringResult:
        """Check if the candidate maps to a monitored series with a wanted episode.

        The resolved series is returned alongside the verdict rather than being
        attached to the candidate.

        Args:
            candidate: The parsed release

        Returns:
            MonitoringResult carrying the verdict and the resolved series
        """
        series = self._series.find_series_by_clean_title(candidate.clean_title)
        if series is None:
            logger.debug("%s is not mapped to any series, skipping", candidate.clean_title)
            return MonitoringResult(monitored=False, rejection=Rejection.UNKNOWN_SERIES)

        if not series.monitored:
            logger.debug("%s is in the library but not monitored, skipping", series.title)
            return MonitoringResult(
                monitored=False, series=series, rejection=Rejection.SERIES_NOT_MONITORED
            )

        episodes = self._episodes.get_episodes_for_candidate(candidate, series, include_file=True)
        if any(not episode.ignored for episode in episodes):
            return MonitoringResult(monitored=True, series=series)

        logger.debug("All matched episodes of %s are ignored, skipping", candidate)
        return MonitoringResult(
            monitored=False, series=series, rejection=Rejection.NO_WANTED_EPISODES
        )
