"""Tests for the monitoring gate."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from wantarr.monitoring import MonitoringChecker
from wantarr.results import Rejection

from tests.factories import make_candidate, make_episode, make_library, make_series


class TestIsMonitored:
    """Tests for MonitoringChecker.is_monitored."""

    def test_unknown_series_rejected_without_episode_lookup(self) -> None:
        """An unmapped title is rejected before any episode lookup."""
        library = make_library()
        episodes = MagicMock()
        checker = MonitoringChecker(library, episodes)

        result = checker.is_monitored(make_candidate(clean_title="unknownshow"))

        assert result.monitored is False
        assert result.series is None
        assert result.rejection == Rejection.UNKNOWN_SERIES
        episodes.get_episodes_for_candidate.assert_not_called()

    def test_unmonitored_series_rejected(self) -> None:
        """A series in the library but not monitored is rejected."""
        library = make_library(series=[make_series(monitored=False)])
        episodes = MagicMock()
        checker = MonitoringChecker(library, episodes)

        result = checker.is_monitored(make_candidate())

        assert result.monitored is False
        assert result.series is not None
        assert result.series.id == 1
        assert result.rejection == Rejection.SERIES_NOT_MONITORED
        episodes.get_episodes_for_candidate.assert_not_called()

    def test_all_ignored_episodes_rejected(self) -> None:
        """A candidate whose matched episodes are all ignored is rejected."""
        library = make_library(
            episodes=[
                make_episode(101, 1, ignored=True),
                make_episode(102, 2, ignored=True),
            ]
        )
        checker = MonitoringChecker(library, library)

        result = checker.is_monitored(make_candidate(episodes=(1, 2)))

        assert result.monitored is False
        assert result.rejection == Rejection.NO_WANTED_EPISODES

    def test_one_wanted_episode_is_enough(self) -> None:
        """At least one non-ignored matched episode makes the candidate monitored."""
        library = make_library(
            episodes=[
                make_episode(101, 1, ignored=True),
                make_episode(102, 2, ignored=False),
            ]
        )
        checker = MonitoringChecker(library, library)

        result = checker.is_monitored(make_candidate(episodes=(1, 2)))

        assert result.monitored is True
        assert result.rejection is None
        assert result.series is not None
        assert result.series.title == "The Office"

    def test_no_matched_episodes_rejected(self) -> None:
        """Episode numbers unknown to the library leave nothing to want."""
        checker = MonitoringChecker(make_library(), make_library())

        result = checker.is_monitored(make_candidate(episodes=(42,)))

        assert result.monitored is False
        assert result.rejection == Rejection.NO_WANTED_EPISODES

    def test_candidate_without_episode_numbers_rejected(self) -> None:
        """A candidate that names no episodes is never monitored."""
        library = make_library()
        checker = MonitoringChecker(library, library)

        result = checker.is_monitored(make_candidate(episodes=()))

        assert result.monitored is False

    def test_result_is_truthy_only_when_monitored(self) -> None:
        """MonitoringResult should be usable as a boolean verdict."""
        library = make_library()
        checker = MonitoringChecker(library, library)

        assert checker.is_monitored(make_candidate())
        assert not checker.is_monitored(make_candidate(clean_title="nothing"))

    def test_candidate_is_not_modified(self) -> None:
        """The resolved series is returned, never attached to the candidate."""
        library = make_library()
        checker = MonitoringChecker(library, library)
        candidate = make_candidate()
        before = candidate.model_dump()

        checker.is_monitored(candidate)

        assert candidate.model_dump() == before
        with pytest.raises(ValidationError):
            candidate.season_number = 2  # type: ignore[misc]
