"""Release title parsing.

Turns indexer titles such as ``The.Office.S02E05E06.720p.HDTV.x264-GRP`` into
``ParseResult`` candidates: series title, season, episode numbers, quality
tier and the proper flag.
"""

from __future__ import annotations

import logging
import re

from wantarr.models.common import Quality, QualityType
from wantarr.models.release import ParseResult

logger = logging.getLogger(__name__)


class ReleaseParseError(ValueError):
    """Raised when a release title has no recognizable episode marker."""


# A bare range end must stand alone so a release group like "-2HD" is not read as one
SEASON_EPISODE_RE = re.compile(
    r"^(?P<title>.+?)[\s._\-\[(]+"
    r"S(?P<season>\d{1,2})"
    r"(?P<episodes>(?:[\s._]?E\d{1,3}(?!\d))+)"
    r"(?:-(?:E(?P<last>\d{1,3})(?!\d)|(?P<bare_last>\d{1,3})(?=[\s._\-\[(]|$)))?",
    re.IGNORECASE,
)
CROSS_EPISODE_RE = re.compile(
    r"^(?P<title>.+?)[\s._\-\[(]+"
    r"(?P<season>\d{1,2})x(?P<episodes>\d{1,3}(?:x\d{1,3})*)(?!\d)",
    re.IGNORECASE,
)
EPISODE_PATTERNS = (SEASON_EPISODE_RE, CROSS_EPISODE_RE)

PROPER_RE = re.compile(r"\b(?:proper|repack)\b", re.IGNORECASE)
TRAILING_YEAR_RE = re.compile(r"[\s._\-(]+(?:19|20)\d{2}\)?$")
NON_ALPHANUMERIC_RE = re.compile(r"[^a-z0-9]")

# Source and resolution keywords, checked in order of precedence
BLURAY_RE = re.compile(r"\b(?:blu-?ray|bdrip|brrip)\b", re.IGNORECASE)
WEBDL_RE = re.compile(r"\bweb[\s._\-]?dl\b", re.IGNORECASE)
HDTV_RE = re.compile(r"\bhdtv\b", re.IGNORECASE)
DVD_RE = re.compile(r"\b(?:dvd(?:rip)?|xvid|divx)\b", re.IGNORECASE)
SDTV_RE = re.compile(r"\b(?:sdtv|pdtv|dsr|tvrip)\b", re.IGNORECASE)
R1080P_RE = re.compile(r"\b1080[pi]\b", re.IGNORECASE)
R720P_RE = re.compile(r"\b720p\b", re.IGNORECASE)


def normalize_title(title: str) -> str:
    """Return the clean title used to match a release to a series.

    Lowercases, spells out ``&``, drops a trailing year and strips everything
    that is not a letter or digit.
    """
    title = title.strip()
    without_year = TRAILING_YEAR_RE.sub("", title)
    if without_year:
        title = without_year
    title = title.lower().replace("&", "and")
    return NON_ALPHANUMERIC_RE.sub("", title)


def parse_quality(title: str) -> Quality:
    """Detect the quality tier and proper flag from a release title."""
    # Separators between words are treated like spaces so \b matches
    text = title.replace(".", " ").replace("_", " ")
    proper = bool(PROPER_RE.search(text))

    if BLURAY_RE.search(text):
        if R1080P_RE.search(text):
            return Quality(quality_type=QualityType.BLURAY1080P, proper=proper)
        if R720P_RE.search(text):
            return Quality(quality_type=QualityType.BLURAY720P, proper=proper)
        return Quality(quality_type=QualityType.DVD, proper=proper)

    if WEBDL_RE.search(text):
        return Quality(quality_type=QualityType.WEBDL, proper=proper)

    if R1080P_RE.search(text) or R720P_RE.search(text):
        return Quality(quality_type=QualityType.HDTV, proper=proper)

    if HDTV_RE.search(text) or SDTV_RE.search(text):
        return Quality(quality_type=QualityType.SDTV, proper=proper)

    if DVD_RE.search(text):
        return Quality(quality_type=QualityType.DVD, proper=proper)

    return Quality(quality_type=QualityType.UNKNOWN, proper=proper)


def _episode_numbers(match: re.Match[str]) -> tuple[int, ...]:
    numbers = [int(n) for n in re.findall(r"\d+", match.group("episodes"))]
    groups = match.groupdict()
    last = groups.get("last") or groups.get("bare_last")
    if last is not None and int(last) > numbers[-1]:
        numbers.extend(range(numbers[-1] + 1, int(last) + 1))
    return tuple(dict.fromkeys(numbers))


def parse_release_title(title: str, size: int = 0) -> ParseResult:
    """Parse a release title into a candidate.

    Args:
        title: The release title as published by the indexer
        size: Size of the release in bytes

    Returns:
        ParseResult for the release

    Raises:
        ReleaseParseError: If no season/episode marker is found
    """
    for pattern in EPISODE_PATTERNS:
        match = pattern.search(title.strip())
        if match is None:
            continue

        series_title = re.sub(r"[._]+", " ", match.group("title")).strip(" -[(")
        result = ParseResult(
            clean_title=normalize_title(series_title),
            series_title=series_title,
            season_number=int(match.group("season")),
            episode_numbers=_episode_numbers(match),
            quality=parse_quality(title),
            size=size,
            title=title,
        )
        logger.debug("Parsed %r as %s", title, result)
        return result

    raise ReleaseParseError(f"Unable to parse release title: {title!r}")
