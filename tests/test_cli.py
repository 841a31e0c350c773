from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from gitstat import cli
from gitstat.cli import main
from gitstat.config import ConfigError, apply_overrides, load_format_options
from gitstat.models import FormatOptions
from gitstat.parser import parse_status
from gitstat.ui import format_summary, render_files_table, render_summary

PORCELAIN = """\
## main...origin/main [ahead 2, behind 1]
M  src/app.py
 M README.md
A  docs/new.md
R  old.txt -> new.txt
 D removed.py
?? notes/todo.txt
"""


def _write_settings(root: Path, settings: object) -> None:
    path = root / ".gitstat" / "settings.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings), encoding="utf-8")


def _invoke(root: Path, *args: str, input_text: str = PORCELAIN) -> Result:
    return CliRunner().invoke(main, ["--repo", str(root), *args], input=input_text)


def test_load_format_options_defaults(tmp_path: Path) -> None:
    assert load_format_options(tmp_path, "diff") == FormatOptions()
    _write_settings(tmp_path, {"upstream": {"expand": True}})
    assert load_format_options(tmp_path, "diff") == FormatOptions()
    assert load_format_options(tmp_path, "upstream") == FormatOptions(expand=True)


def test_load_format_options_merges_section(tmp_path: Path) -> None:
    _write_settings(tmp_path, {"diff": {"prefix": "Δ ", "separator": ", ", "empty": "clean"}})
    assert load_format_options(tmp_path, "diff") == FormatOptions(
        empty="clean", expand=False, prefix="Δ ", separator=", "
    )


@pytest.mark.parametrize(
    "settings",
    [
        [1, 2],
        {"diff": "expand"},
        {"diff": {"colour": "red"}},
        {"diff": {"expand": "yes"}},
        {"diff": {"prefix": 3}},
    ],
)
def test_load_format_options_rejects_bad_settings(tmp_path: Path, settings: object) -> None:
    _write_settings(tmp_path, settings)
    with pytest.raises(ConfigError):
        load_format_options(tmp_path, "diff")


def test_load_format_options_rejects_bad_json_and_section(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_format_options(tmp_path, "branch")
    path = tmp_path / ".gitstat" / "settings.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_format_options(tmp_path, "diff")


def test_apply_overrides_skips_unset_values() -> None:
    base = FormatOptions(prefix=">", separator=", ")
    assert apply_overrides(base, expand=None, prefix=None) == base
    assert apply_overrides(base, expand=True, empty="") == FormatOptions(
        empty="", expand=True, prefix=">", separator=", "
    )


def test_render_helpers_match_plain_output(tmp_path: Path) -> None:
    status = parse_status(PORCELAIN, tmp_path)
    assert status is not None
    assert format_summary(status) == "main  1↓ 2↑  +2 ~3 -1"
    assert render_summary(status).plain == format_summary(status)
    assert render_files_table(status).row_count == len(status.files)


def test_cli_summary(tmp_path: Path) -> None:
    result = _invoke(tmp_path)
    assert result.exit_code == 0, result.output
    assert result.output == "main  1↓ 2↑  +2 ~3 -1\n"


def test_cli_summary_expanded(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "--expand", "--separator", ", ")
    assert result.exit_code == 0, result.output
    assert result.output == (
        "main  1 commit behind, 2 commits ahead  "
        "2 files added, 3 files changed, 1 file deleted\n"
    )


def test_cli_summary_uses_settings(tmp_path: Path) -> None:
    _write_settings(tmp_path, {"diff": {"prefix": "Δ "}, "upstream": {"expand": True}})
    result = _invoke(tmp_path)
    assert result.exit_code == 0, result.output
    assert result.output == "main  1 commit behind 2 commits ahead  Δ +2 ~3 -1\n"

    result = _invoke(tmp_path, "--compact")
    assert result.output == "main  1↓ 2↑  Δ +2 ~3 -1\n"


def test_cli_summary_clean_repository(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "--empty", "", input_text="## main...origin/main\n")
    assert result.exit_code == 0, result.output
    assert result.output == "main\n"


def test_cli_files(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "files")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 6
    assert lines[0] == "M modified  staged app.py  •  src"
    assert lines[3].startswith("R renamed")
    assert lines[-1].startswith("? untracked")
    assert lines[-1].endswith("todo.txt  •  notes")


def test_cli_files_clean(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "files", input_text="## main\n")
    assert result.exit_code == 0, result.output
    assert result.output == "working tree clean\n"


def test_cli_reports_bad_input(tmp_path: Path) -> None:
    result = _invoke(tmp_path, input_text="garbage\n")
    assert result.exit_code == 1
    assert "gitstat: Invalid status entry" in result.output

    result = _invoke(tmp_path, input_text="")
    assert result.exit_code == 1
    assert "gitstat: no status output to read" in result.output


def test_cli_reports_bad_settings(tmp_path: Path) -> None:
    _write_settings(tmp_path, {"diff": {"expand": "yes"}})
    result = _invoke(tmp_path)
    assert result.exit_code == 1
    assert "gitstat:" in result.output


def test_cli_files_renders_table_on_terminal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_stdout_is_tty", lambda: True)
    result = _invoke(tmp_path, "files")
    assert result.exit_code == 0, result.output
    header = result.output.splitlines()[0]
    assert "STATUS" in header
    assert "DIRECTORY" in header


def test_cli_plain_flag_skips_rich_on_terminal(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_stdout_is_tty", lambda: True)
    result = _invoke(tmp_path, "--plain", "files")
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert len(lines) == 6
    assert lines[0] == "M modified  staged app.py  •  src"
    assert "STATUS" not in result.output

    result = _invoke(tmp_path, "--plain")
    assert result.output == "main  1↓ 2↑  +2 ~3 -1\n"
