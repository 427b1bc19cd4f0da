"""wantarr - Decide whether TV releases are wanted by your library.

A Python library for deciding whether a newly found release should be
downloaded, given which series are monitored, each series' quality profile,
the files already held and what was grabbed before.

Quick Start
-----------
Evaluate a release against a library snapshot::

    from pathlib import Path

    from wantarr import DecisionEngine, Library, parse_release_title

    library = Library.from_file(Path("library.json"))
    engine = DecisionEngine(library, library, library, library)

    candidate = parse_release_title("The.Office.S02E05.720p.HDTV.x264-GRP", size=400_000_000)
    decision = engine.evaluate(candidate)
    print(f"Wanted: {decision.accepted} ({decision.reason})")

Run the two stages separately::

    monitoring = engine.is_monitored(candidate)
    if monitoring.monitored:
        needed = engine.is_quality_needed(candidate, monitoring.series)

Compare qualities directly::

    from wantarr import Quality, QualityType, is_upgrade

    is_upgrade(
        Quality(quality_type=QualityType.SDTV),
        Quality(quality_type=QualityType.HDTV),
        cutoff=QualityType.WEBDL,
    )

CLI Usage
---------
The library includes a CLI::

    wantarr check "The.Office.S02E05.720p.HDTV.x264-GRP" --size 400000000
    wantarr batch releases.tsv --format json
    wantarr parse "The.Office.S02E05E06.720p.HDTV.x264-GRP"

Classes
-------
DecisionEngine
    Top-level acceptance decisions.
MonitoringChecker
    Gate that maps a release to a monitored series.
SizeCalculator
    Size ceiling heuristics.
Library
    In-memory lookups over a library snapshot.
"""

from wantarr.decision import BatchResult, DecisionEngine
from wantarr.library import Library, LibrarySnapshot
from wantarr.models import ParseResult, Quality, QualityType
from wantarr.monitoring import MonitoringChecker
from wantarr.parser import ReleaseParseError, parse_release_title
from wantarr.quality import is_upgrade
from wantarr.results import Decision, MonitoringResult, Rejection
from wantarr.size import SizeCalculator

__version__ = "0.1.0"

__all__ = [
    "BatchResult",
    "Decision",
    "DecisionEngine",
    "Library",
    "LibrarySnapshot",
    "MonitoringChecker",
    "MonitoringResult",
    "ParseResult",
    "Quality",
    "QualityType",
    "Rejection",
    "ReleaseParseError",
    "SizeCalculator",
    "__version__",
    "is_upgrade",
    "parse_release_title",
]
