import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, TextIO

import click
from rich.console import Console

from gitstat.config import ConfigError, apply_overrides, load_format_options
from gitstat.models import FormatOptions, RepositoryStatus
from gitstat.parser import StatusParseError, parse_status
from gitstat.ui import format_file_line, format_summary, render_files_table, render_summary


@dataclass
class CliState:
    status: RepositoryStatus
    diff_options: FormatOptions
    upstream_options: FormatOptions
    plain: bool


def _fail(message: str) -> NoReturn:
    click.echo(f"gitstat: {message}", err=True)
    raise SystemExit(1)


def _stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def _use_plain(plain: bool) -> bool:
    return plain or not _stdout_is_tty()


@click.group(context_settings={"help_option_names": ["-h", "--help"]}, invoke_without_command=True)
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="Output of `git status --porcelain --branch` (v1 or v2). Defaults to stdin.",
)
@click.option(
    "--repo",
    "repo",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    help="Repository root the file names are relative to.",
)
@click.option("--sha", default="", help="HEAD commit, for porcelain v1 input.")
@click.option("--expand/--compact", default=None, help="Sentence or symbolic summaries.")
@click.option("--prefix", default=None, help="Text put before non-empty summaries.")
@click.option("--separator", default=None, help="Text between summary parts.")
@click.option("--empty", default=None, help="Text shown when a summary is empty.")
@click.option("--plain", is_flag=True, help="Plain text output without styling.")
@click.pass_context
def main(
    ctx: click.Context,
    input_file: TextIO,
    repo: Path,
    sha: str,
    expand: bool | None,
    prefix: str | None,
    separator: str | None,
    empty: str | None,
    plain: bool,
) -> None:
    """gitstat: summarize git status output."""
    repo_root = repo.absolute()
    try:
        overrides = {"expand": expand, "prefix": prefix, "separator": separator, "empty": empty}
        diff_options = apply_overrides(load_format_options(repo_root, "diff"), **overrides)
        upstream_options = apply_overrides(load_format_options(repo_root, "upstream"), **overrides)
        status = parse_status(input_file.read(), repo_root, sha=sha)
    except (ConfigError, StatusParseError) as exc:
        _fail(str(exc))

    if status is None:
        _fail("no status output to read")

    ctx.obj = CliState(
        status=status,
        diff_options=diff_options,
        upstream_options=upstream_options,
        plain=_use_plain(plain),
    )
    if ctx.invoked_subcommand is not None:
        return

    if ctx.obj.plain:
        click.echo(format_summary(status, diff_options, upstream_options))
    else:
        Console().print(render_summary(status, diff_options, upstream_options))


@main.command("files")
@click.pass_obj
def files(state: CliState) -> None:
    """List changed files with their status."""
    if not state.status.files:
        click.echo("working tree clean")
        return
    if state.plain:
        for entry in state.status.files:
            click.echo(format_file_line(entry))
        return
    Console().print(render_files_table(state.status))


if __name__ == "__main__":
    main()
