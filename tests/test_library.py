"""Tests for the in-memory library lookups."""

import json
from pathlib import Path

import pytest

from wantarr.config import ConfigurationError, QualityDefinitionNotFoundError
from wantarr.library import Library
from wantarr.models import HistoryRecord, QualityType

from tests.factories import (
    make_candidate,
    make_episode,
    make_library,
    make_season,
    make_series,
    quality,
)

SNAPSHOT = {
    "qualityDefinitions": [
        {"qualityType": "sdtv", "maxSize": 367001600},
        {"qualityType": "hdtv", "maxSize": 734003200},
    ],
    "series": [
        {
            "id": 1,
            "title": "The Office",
            "monitored": True,
            "runtime": 22,
            "qualityProfile": {"name": "HD", "allowed": ["sdtv", "hdtv"], "cutoff": "hdtv"},
        },
        {
            "id": 2,
            "title": "Doctor Who (2005)",
            "monitored": False,
            "runtime": 45,
            "qualityProfile": {"allowed": ["hdtv"], "cutoff": "hdtv"},
        },
    ],
    "episodes": [
        {"id": 10, "seriesId": 1, "seasonNumber": 2, "episodeNumber": 5},
        {
            "id": 11,
            "seriesId": 1,
            "seasonNumber": 2,
            "episodeNumber": 6,
            "ignored": True,
            "episodeFile": {"quality": {"qualityType": "sdtv", "proper": True}, "size": 1000},
        },
    ],
    "history": [
        {"episodeId": 10, "quality": {"qualityType": "sdtv"}, "sourceTitle": "The.Office.S02E05"}
    ],
}


def _write_snapshot(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "library.json"
    path.write_text(json.dumps(data))
    return path


class TestFromFile:
    """Tests for loading a library from a JSON snapshot."""

    def test_loads_snapshot(self, tmp_path: Path) -> None:
        """Should load series, episodes, history and definitions."""
        library = Library.from_file(_write_snapshot(tmp_path, SNAPSHOT))

        series = library.find_series_by_clean_title("theoffice")
        assert series is not None
        assert series.id == 1
        assert series.quality_profile.cutoff == QualityType.HDTV
        assert QualityType.SDTV in series.quality_profile.allowed

        definition = library.get_quality_type_definition(QualityType.HDTV)
        assert definition.max_size == 734003200

        assert library.get_best_quality_in_history(10) == quality(QualityType.SDTV)

    def test_clean_title_drops_year(self, tmp_path: Path) -> None:
        """Series titles with a year resolve by their clean title."""
        library = Library.from_file(_write_snapshot(tmp_path, SNAPSHOT))

        series = library.find_series_by_clean_title("doctorwho")
        assert series is not None
        assert series.monitored is False

    def test_explicit_clean_title_kept(self, tmp_path: Path) -> None:
        """A cleanTitle present in the snapshot is used as is."""
        data = json.loads(json.dumps(SNAPSHOT))
        data["series"][0]["cleanTitle"] = "officeus"
        library = Library.from_file(_write_snapshot(tmp_path, data))

        assert library.find_series_by_clean_title("officeus") is not None
        assert library.find_series_by_clean_title("theoffice") is None

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing snapshot is a configuration error."""
        with pytest.raises(ConfigurationError, match="not found"):
            Library.from_file(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        """Malformed JSON is a configuration error."""
        path = tmp_path / "library.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid library file"):
            Library.from_file(path)

    def test_invalid_snapshot_raises(self, tmp_path: Path) -> None:
        """A snapshot that fails validation is a configuration error."""
        data = {"series": [{"id": 1, "title": "No Profile"}]}

        with pytest.raises(ConfigurationError, match="Invalid library file"):
            Library.from_file(_write_snapshot(tmp_path, data))

    def test_unknown_quality_type_raises(self, tmp_path: Path) -> None:
        """Unknown tier names are rejected."""
        data = {"qualityDefinitions": [{"qualityType": "8k", "maxSize": 1}]}

        with pytest.raises(ConfigurationError):
            Library.from_file(_write_snapshot(tmp_path, data))

    def test_cutoff_below_allowed_tiers_must_be_allowed(self, tmp_path: Path) -> None:
        """A cutoff that is neither allowed nor above every allowed tier is rejected."""
        data = json.loads(json.dumps(SNAPSHOT))
        data["series"][0]["qualityProfile"] = {"allowed": ["sdtv", "webdl"], "cutoff": "hdtv"}

        with pytest.raises(ConfigurationError):
            Library.from_file(_write_snapshot(tmp_path, data))

    def test_cutoff_above_all_allowed_tiers_accepted(self, tmp_path: Path) -> None:
        """A cutoff above every allowed tier is a valid boundary."""
        data = json.loads(json.dumps(SNAPSHOT))
        data["series"][0]["qualityProfile"] = {"allowed": ["sdtv"], "cutoff": "bluray1080p"}

        library = Library.from_file(_write_snapshot(tmp_path, data))

        series = library.find_series_by_clean_title("theoffice")
        assert series is not None
        assert series.quality_profile.cutoff == QualityType.BLURAY1080P


class TestSeriesLookup:
    """Tests for find_series_by_clean_title."""

    def test_unknown_title_returns_none(self) -> None:
        """An unknown clean title should return None."""
        assert make_library().find_series_by_clean_title("nothing") is None

    def test_duplicate_clean_title_keeps_first(self) -> None:
        """The first series with a clean title wins."""
        library = make_library(
            series=[make_series(series_id=1), make_series(series_id=2, title="The Office!")]
        )

        series = library.find_series_by_clean_title("theoffice")
        assert series is not None
        assert series.id == 1


class TestEpisodeLookups:
    """Tests for episode lookups."""

    def test_episodes_in_candidate_order(self) -> None:
        """Matched episodes come back in the candidate's order."""
        library = make_library()
        episodes = library.get_episodes_for_candidate(make_candidate(episodes=(4, 3)), make_series())
        assert [e.episode_number for e in episodes] == [4, 3]

    def test_unknown_episode_numbers_skipped(self) -> None:
        """Episode numbers not in the library are skipped."""
        library = make_library()
        episodes = library.get_episodes_for_candidate(
            make_candidate(episodes=(10, 11)), make_series()
        )
        assert [e.episode_number for e in episodes] == [10]

    def test_other_series_episodes_not_matched(self) -> None:
        """Episodes are looked up within the candidate's series only."""
        library = make_library(episodes=make_season(series_id=2))
        assert library.get_episodes_for_candidate(make_candidate(), make_series()) == []

    def test_include_file(self) -> None:
        """include_file controls whether the held file is returned."""
        library = make_library(
            episodes=[make_episode(105, 5, file_quality=quality(QualityType.SDTV))]
        )
        candidate = make_candidate()

        with_file = library.get_episodes_for_candidate(candidate, make_series(), include_file=True)
        without_file = library.get_episodes_for_candidate(
            candidate, make_series(), include_file=False
        )

        assert with_file[0].episode_file is not None
        assert without_file[0].episode_file is None

    def test_first_or_last_episode_of_season(self) -> None:
        """Only the lowest and highest episode numbers open or close a season."""
        library = make_library()
        assert library.is_first_or_last_episode_of_season(1, 1, 1)
        assert library.is_first_or_last_episode_of_season(1, 1, 10)
        assert not library.is_first_or_last_episode_of_season(1, 1, 5)

    def test_unknown_season_is_neither(self) -> None:
        """A season with no episodes has no premiere or finale."""
        assert not make_library().is_first_or_last_episode_of_season(1, 7, 1)


class TestHistoryLookup:
    """Tests for get_best_quality_in_history."""

    def test_no_history_returns_none(self) -> None:
        """An episode never grabbed has no best quality."""
        assert make_library().get_best_quality_in_history(105) is None

    def test_best_quality_wins(self) -> None:
        """The highest quality across records is returned."""
        library = make_library(
            history=[
                HistoryRecord(episode_id=105, quality=quality(QualityType.HDTV)),
                HistoryRecord(episode_id=105, quality=quality(QualityType.HDTV, proper=True)),
                HistoryRecord(episode_id=105, quality=quality(QualityType.SDTV)),
                HistoryRecord(episode_id=106, quality=quality(QualityType.WEBDL)),
            ]
        )
        assert library.get_best_quality_in_history(105) == quality(QualityType.HDTV, proper=True)


class TestQualityDefinitions:
    """Tests for get_quality_type_definition."""

    def test_missing_definition_raises(self) -> None:
        """A tier without a definition raises a configuration error."""
        library = make_library(definitions=[])

        with pytest.raises(QualityDefinitionNotFoundError, match="webdl"):
            library.get_quality_type_definition(QualityType.WEBDL)

    def test_missing_definition_is_configuration_error(self) -> None:
        """QualityDefinitionNotFoundError is a ConfigurationError."""
        with pytest.raises(ConfigurationError):
            make_library(definitions=[]).get_quality_type_definition(QualityType.SDTV)
