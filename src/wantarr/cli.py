"""Command-line interface for wantarr."""

from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path  # noqa: TC003 - needed at runtime for typer
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from wantarr.config import Config, ConfigurationError
from wantarr.decision import BatchResult, DecisionEngine
from wantarr.library import Library
from wantarr.logging_config import configure_logging, parse_log_level
from wantarr.parser import ReleaseParseError, parse_release_title

if TYPE_CHECKING:
    from wantarr.models.release import ParseResult
    from wantarr.results import Decision

app = typer.Typer(
    name="wantarr",
    help="Decide whether TV releases are wanted by your library.",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Output format options."""

    JSON = "json"
    TABLE = "table"
    SIMPLE = "simple"


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-l",
            help="Logging level (debug, info, warning, error, critical).",
        ),
    ] = None,
) -> None:
    """Decide whether TV releases are wanted by your library."""
    # Priority: CLI flag > WANTARR_LOG_LEVEL > config file > default
    level = log_level or os.environ.get("WANTARR_LOG_LEVEL")
    if level is None:
        try:
            level = Config.load().logging.level
        except ConfigurationError as e:
            error_console.print(f"[red]Configuration error:[/red] {e}")
            raise typer.Exit(1) from e

    try:
        parse_log_level(level)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    configure_logging(level)


def _episodes_label(candidate: ParseResult) -> str:
    return ", ".join(f"S{candidate.season_number:02d}E{n:02d}" for n in candidate.episode_numbers)


def decision_to_dict(decision: Decision) -> dict[str, object]:
    """Convert a decision to a JSON-serializable dictionary."""
    candidate = decision.candidate
    data: dict[str, object] = {
        "title": candidate.title or str(candidate),
        "clean_title": candidate.clean_title,
        "season_number": candidate.season_number,
        "episode_numbers": list(candidate.episode_numbers),
        "quality": candidate.quality.quality_type.value,
        "proper": candidate.quality.proper,
        "size": candidate.size,
        "accepted": decision.accepted,
        "rejection": decision.rejection.value if decision.rejection else None,
        "max_size": decision.max_size,
    }
    if decision.series is not None:
        data["series"] = {"id": decision.series.id, "title": decision.series.title}
    return data


def format_decision_json(decision: Decision) -> str:
    """Format a decision as JSON."""
    return json.dumps(decision_to_dict(decision), indent=2)


def format_decision_table(decision: Decision) -> Table:
    """Format a decision as a rich table."""
    candidate = decision.candidate
    table = Table(title=escape(f"Release Decision: {candidate.title or candidate}"))

    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green" if decision.accepted else "red")

    table.add_row("Wanted", "Yes" if decision.accepted else "No")
    table.add_row("Reason", decision.reason)
    series_name = decision.series.title if decision.series else candidate.clean_title
    table.add_row("Series", escape(series_name))
    table.add_row("Episodes", _episodes_label(candidate) or "None")
    table.add_row("Quality", str(candidate.quality))
    table.add_row("Size", f"{candidate.size:,} bytes")
    if decision.max_size is not None:
        table.add_row("Max Size", f"{decision.max_size:,} bytes")

    return table


def format_decision_simple(decision: Decision) -> str:
    """Format a decision as simple text."""
    status = "wanted" if decision.accepted else f"rejected ({decision.reason})"
    return f"{decision.candidate.title or decision.candidate}: {status}"


def print_decision(decision: Decision, output_format: OutputFormat) -> None:
    """Print a decision in the specified format."""
    if output_format == OutputFormat.JSON:
        _print_plain(format_decision_json(decision))
    elif output_format == OutputFormat.TABLE:
        console.print(format_decision_table(decision))
    else:
        _print_plain(format_decision_simple(decision))


def _print_plain(text: str) -> None:
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def get_engine(library_path: Path | None) -> DecisionEngine:
    """Build a decision engine over the configured library.

    Exits with code 2 if no library is configured or it cannot be loaded.
    """
    try:
        path = library_path or Config.load().require_library().path
        library = Library.from_file(path)
    except ConfigurationError as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(2) from e
    return DecisionEngine(library, library, library, library)


def read_batch_file(path: Path) -> list[tuple[str, int]]:
    """Read ``title<TAB>size`` lines, skipping blanks and ``#`` comments.

    A line without a size is read with size 0.

    Raises:
        ValueError: If the file is not UTF-8 text or a size is not an integer
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path} is not UTF-8 text") from e

    entries: list[tuple[str, int]] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        title, _, size = line.partition("\t")
        try:
            entries.append((title.strip(), int(size.strip() or 0)))
        except ValueError:
            raise ValueError(f"Line {line_number}: invalid size {size.strip()!r}") from None
    return entries


LibraryOption = Annotated[
    Path | None,
    typer.Option(
        "--library",
        help="Library snapshot (JSON). Defaults to the configured library.",
    ),
]
FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Output format."),
]


@app.command("check")
def check(
    title: Annotated[str, typer.Argument(help="Release title to evaluate.")],
    size: Annotated[int, typer.Option("--size", "-s", min=0, help="Release size in bytes.")] = 0,
    library: LibraryOption = None,
    output_format: FormatOption = OutputFormat.TABLE,
) -> None:
    """Check whether a single release is wanted.

    Example:
        wantarr check "The.Office.S02E05.720p.HDTV.x264-GRP" --size 400000000
    """
    try:
        candidate = parse_release_title(title, size=size)
    except ReleaseParseError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    engine = get_engine(library)
    try:
        decision = engine.evaluate(candidate)
    except ConfigurationError as e:
        error_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(2) from e

    print_decision(decision, output_format)
    raise typer.Exit(0 if decision.accepted else 1)


@app.command("batch")
def batch(
    file: Annotated[Path, typer.Argument(help="File of title<TAB>size lines.")],
    library: LibraryOption = None,
    output_format: FormatOption = OutputFormat.SIMPLE,
) -> None:
    """Check every release listed in a file.

    Titles that cannot be parsed are reported and skipped.
    """
    if not file.exists():
        error_console.print(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(2)

    try:
        entries = read_batch_file(file)
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    candidates: list[ParseResult] = []
    parse_errors: list[str] = []
    for title, size in entries:
        try:
            candidates.append(parse_release_title(title, size=size))
        except ReleaseParseError as e:
            parse_errors.append(str(e))

    engine = get_engine(library)
    result = engine.evaluate_batch(candidates)

    if output_format == OutputFormat.JSON:
        _print_plain(json.dumps(_batch_to_dict(result, parse_errors), indent=2))
        return

    for decision in result.decisions:
        print_decision(decision, output_format)
    for message in [*parse_errors, *result.errors]:
        error_console.print(f"[yellow]Skipped:[/yellow] {message}")

    console.print(
        f"\n[bold]Summary:[/bold] {len(result.accepted)} wanted, "
        f"{len(result.decisions) - len(result.accepted)} rejected, "
        f"{len(parse_errors) + len(result.errors)} skipped"
    )


def _batch_to_dict(result: BatchResult, parse_errors: list[str]) -> dict[str, object]:
    return {
        "decisions": [decision_to_dict(d) for d in result.decisions],
        "errors": [*parse_errors, *result.errors],
    }


@app.command("parse")
def parse(
    title: Annotated[str, typer.Argument(help="Release title to parse.")],
) -> None:
    """Show how a release title is parsed."""
    try:
        candidate = parse_release_title(title)
    except ReleaseParseError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2) from e

    table = Table(title=escape(f"Parsed: {title}"))
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Series", escape(candidate.series_title))
    table.add_row("Clean Title", candidate.clean_title)
    table.add_row("Episodes", _episodes_label(candidate))
    table.add_row("Quality", candidate.quality.quality_type.value)
    table.add_row("Proper", "Yes" if candidate.quality.proper else "No")
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from wantarr import __version__

    console.print(f"wantarr version {__version__}")


if __name__ == "__main__":
    app()
