"""Rich rendering of repository status."""

import posixpath

from rich.table import Table
from rich.text import Text

from gitstat.models import FormatOptions, RepositoryStatus, StatusEntry

STATUS_STYLES = {
    "A": "green",
    "?": "green",
    "C": "green",
    "D": "red",
    "M": "yellow",
    "T": "yellow",
    "R": "cyan",
    "U": "bold red",
    "!": "dim",
}


def _status_style(entry: StatusEntry) -> str:
    return STATUS_STYLES.get(str(entry.status), "magenta")


def format_summary(
    status: RepositoryStatus,
    diff_options: FormatOptions | None = None,
    upstream_options: FormatOptions | None = None,
) -> str:
    parts = [
        status.branch,
        status.get_upstream_status(upstream_options),
        status.get_diff_status(diff_options),
    ]
    return "  ".join(part for part in parts if part)


def render_summary(
    status: RepositoryStatus,
    diff_options: FormatOptions | None = None,
    upstream_options: FormatOptions | None = None,
) -> Text:
    text = Text(status.branch, style="bold" if not status.detached else "bold yellow")
    upstream = status.get_upstream_status(upstream_options)
    if upstream:
        text.append("  ")
        text.append(upstream, style="cyan")
    diff = status.get_diff_status(diff_options)
    if diff:
        text.append("  ")
        text.append(diff)
    return text


def format_file_line(entry: StatusEntry) -> str:
    staged = "staged" if entry.staged else "      "
    return f"{entry.status} {entry.get_status_text():<9} {staged} {entry.get_formatted_path()}"


def render_files_table(status: RepositoryStatus) -> Table:
    table = Table(box=None, show_edge=False, pad_edge=False)
    table.add_column("ST")
    table.add_column("STATUS")
    table.add_column("STAGED")
    table.add_column("FILE")
    table.add_column("DIRECTORY", style="dim")
    for entry in status.files:
        style = _status_style(entry)
        table.add_row(
            Text(str(entry.status), style=style),
            Text(entry.get_status_text(), style=style),
            "yes" if entry.staged else "",
            posixpath.basename(entry.file_name),
            entry.get_formatted_directory(include_original=True),
        )
    return table
