"""Acceptance decisions for release candidates.

``DecisionEngine`` answers whether a parsed release is wanted, combining the
monitoring gate, the quality profile, the size ceiling and the upgrade policy
against every held file and every previous grab of the matched episodes:

    engine = DecisionEngine(library, library, library, library)
    decision = engine.evaluate(parse_release_title(title, size=size))
    if decision.accepted:
        ...

The engine keeps no state between calls, so one instance can evaluate any
number of candidates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wantarr.config import ConfigurationError
from wantarr.monitoring import MonitoringChecker
from wantarr.quality import is_upgrade
from wantarr.results import Decision, MonitoringResult, Rejection
from wantarr.size import SizeCalculator

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wantarr.models.release import ParseResult
    from wantarr.models.sonarr import Series
    from wantarr.providers import (
        EpisodeProvider,
        HistoryProvider,
        QualityTypeProvider,
        SeriesProvider,
    )

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Decisions for a batch of candidates and the candidates that failed."""

    decisions: list[Decision] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def accepted(self) -> list[Decision]:
        """Decisions that accepted their candidate."""
        return [d for d in self.decisions if d.accepted]


class DecisionEngine:
    """Decide whether release candidates are needed."""

    def __init__(
        self,
        series: SeriesProvider,
        episodes: EpisodeProvider,
        history: HistoryProvider,
        quality_types: QualityTypeProvider,
    ) -> None:
        """Initialize the decision engine.

        Args:
            series: Series lookup
            episodes: Episode lookup
            history: Download history lookup
            quality_types: Quality tier size definitions
        """
        self._episodes = episodes
        self._history = history
        self._monitoring = MonitoringChecker(series, episodes)
        self._size = SizeCalculator(quality_types, episodes)

    def is_monitored(self, candidate: ParseResult) -> MonitoringResult:
        """Check if the candidate maps to a monitored series with a wanted episode."""
        return self._monitoring.is_monitored(candidate)

    def is_acceptable_size(self, candidate: ParseResult, series: Series) -> bool:
        """Check if the candidate is within its size ceiling."""
        return self._size.is_acceptable_size(candidate, series)

    def is_quality_needed(self, candidate: ParseResult, series: Series) -> bool:
        """Check if the candidate is needed at its quality.

        Assumes ``is_monitored`` already accepted the candidate for ``series``.
        Multi-episode releases are all-or-nothing: every matched episode must
        accept the candidate as an upgrade.

        Raises:
            QualityDefinitionNotFoundError: If the candidate's tier has no size definition
        """
        return self.check_quality(candidate, series) is None

    def check_quality(self, candidate: ParseResult, series: Series) -> Rejection | None:
        """Run the quality checks in order and return the first failing one.

        Returns:
            The rejection reason, or None if the candidate is needed
        """
        return self._run_quality_checks(candidate, series)[0]

    def _run_quality_checks(
        self, candidate: ParseResult, series: Series
    ) -> tuple[Rejection | None, int | None]:
        """Return the first failing check and the size ceiling, if it was computed."""
        logger.debug("Checking if %s meets quality requirements", candidate)

        if not candidate.episode_numbers:
            logger.debug("%s names no episodes", candidate)
            return Rejection.NO_EPISODES, None

        profile = series.quality_profile
        if candidate.quality.quality_type not in profile.allowed:
            logger.debug("Quality %s rejected by profile %r", candidate.quality, profile.name)
            return Rejection.QUALITY_NOT_ALLOWED, None

        max_size = self._size.max_size(candidate, series)
        if candidate.size > max_size:
            logger.debug(
                "%s is too large: %d bytes, maximum %d bytes", candidate, candidate.size, max_size
            )
            return Rejection.SIZE_EXCEEDED, max_size

        for episode in self._episodes.get_episodes_for_candidate(
            candidate, series, include_file=True
        ):
            if episode.episode_file is not None:
                held = episode.episode_file.quality
                logger.debug("Comparing held file %s with %s", held, candidate.quality)
                if not is_upgrade(held, candidate.quality, profile.cutoff):
                    return Rejection.EXISTING_FILE_NOT_UPGRADE, max_size

            best_in_history = self._history.get_best_quality_in_history(episode.id)
            if best_in_history is not None:
                logger.debug("Comparing history %s with %s", best_in_history, candidate.quality)
                if not is_upgrade(best_in_history, candidate.quality, profile.cutoff):
                    return Rejection.HISTORY_NOT_UPGRADE, max_size

        logger.debug("%s is needed", candidate)
        return None, max_size

    def evaluate(self, candidate: ParseResult) -> Decision:
        """Run the monitoring gate and then the quality checks.

        Raises:
            QualityDefinitionNotFoundError: If the candidate's tier has no size definition
        """
        monitoring = self._monitoring.is_monitored(candidate)
        if not monitoring.monitored or monitoring.series is None:
            return Decision(
                candidate=candidate,
                accepted=False,
                rejection=monitoring.rejection,
                series=monitoring.series,
            )

        rejection, max_size = self._run_quality_checks(candidate, monitoring.series)
        return Decision(
            candidate=candidate,
            accepted=rejection is None,
            rejection=rejection,
            series=monitoring.series,
            max_size=max_size,
        )

    def evaluate_batch(self, candidates: Iterable[ParseResult]) -> BatchResult:
        """Evaluate candidates one by one.

        A configuration problem with one candidate is recorded and does not stop
        the rest of the batch.
        """
        result = BatchResult()
        for candidate in candidates:
            try:
                result.decisions.append(self.evaluate(candidate))
            except ConfigurationError as e:
                error_msg = f"Error evaluating {candidate}: {e}"
                logger.error(error_msg)
                result.errors.append(error_msg)
        logger.info(
            "Evaluated %d candidates: %d wanted, %d errors",
            len(result.decisions),
            len(result.accepted),
            len(result.errors),
        )
        return result
