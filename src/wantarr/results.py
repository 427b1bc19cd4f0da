"""Decision results and rejection reasons."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wantarr.models.release import ParseResult
    from wantarr.models.sonarr import Series


class Rejection(Enum):
    """Reason a candidate was not accepted.

    Attributes:
        UNKNOWN_SERIES: The title matches no series in the library
        SERIES_NOT_MONITORED: The series is in the library but not monitored
        NO_WANTED_EPISODES: Every matched episode is ignored, or none matched
        NO_EPISODES: The candidate names no episode numbers
        QUALITY_NOT_ALLOWED: The quality profile does not allow the tier
        SIZE_EXCEEDED: The candidate is larger than its size ceiling
        EXISTING_FILE_NOT_UPGRADE: A held file is not worth replacing
        HISTORY_NOT_UPGRADE: A better or equal grab is already in history
    """

    UNKNOWN_SERIES = "unknown_series"
    SERIES_NOT_MONITORED = "series_not_monitored"
    NO_WANTED_EPISODES = "no_wanted_episodes"
    NO_EPISODES = "no_episodes"
    QUALITY_NOT_ALLOWED = "quality_not_allowed"
    SIZE_EXCEEDED = "size_exceeded"
    EXISTING_FILE_NOT_UPGRADE = "existing_file_not_upgrade"
    HISTORY_NOT_UPGRADE = "history_not_upgrade"

    @property
    def description(self) -> str:
        """Human readable description of the reason."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[Rejection, str] = {
    Rejection.UNKNOWN_SERIES: "Unknown series",
    Rejection.SERIES_NOT_MONITORED: "Series not monitored",
    Rejection.NO_WANTED_EPISODES: "No wanted episodes",
    Rejection.NO_EPISODES: "No episode numbers",
    Rejection.QUALITY_NOT_ALLOWED: "Quality not allowed by profile",
    Rejection.SIZE_EXCEEDED: "Too large",
    Rejection.EXISTING_FILE_NOT_UPGRADE: "Existing file is good enough",
    Rejection.HISTORY_NOT_UPGRADE: "Already grabbed at this quality",
}


@dataclass(frozen=True)
class MonitoringResult:
    """Outcome of the monitoring gate.

    ``series`` is set whenever the title resolved to a series, even if the
    verdict is a rejection.
    """

    monitored: bool
    series: Series | None = None
    rejection: Rejection | None = None

    def __bool__(self) -> bool:
        return self.monitored


@dataclass(frozen=True)
class Decision:
    """Final verdict for a candidate.

    ``max_size`` is the size ceiling in bytes, set once the size check has run.
    """

    candidate: ParseResult
    accepted: bool
    rejection: Rejection | None = None
    series: Series | None = None
    max_size: int | None = None

    @property
    def reason(self) -> str:
        """Short description of the verdict."""
        if self.accepted:
            return "Wanted"
        return self.rejection.description if self.rejection else "Rejected"
