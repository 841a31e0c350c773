"""Parsing of `git status --porcelain --branch` output."""

import re
from pathlib import Path

from gitstat.models import RepositoryStatus, StatusEntry, UpstreamState

V1_BRANCH_RE = re.compile(
    r"^## (?:No commits yet on |Initial commit on )?(?P<branch>.+?)"
    r"(?:\.\.\.(?P<upstream>\S+))?(?: \[(?P<tracking>[^\]]*)\])?$"
)
AHEAD_RE = re.compile(r"ahead (\d+)")
BEHIND_RE = re.compile(r"behind (\d+)")
V2_AB_RE = re.compile(r"^\+(\d+) -(\d+)$")

_ESCAPES = {
    "a": b"\a",
    "b": b"\b",
    "t": b"\t",
    "n": b"\n",
    "v": b"\v",
    "f": b"\f",
    "r": b"\r",
    '"': b'"',
    "\\": b"\\",
}


class StatusParseError(Exception):
    """A line of status output could not be parsed."""

    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of unusual file names."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path
    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue
        octal = body[i + 1 : i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8))
            i += 4
            continue
        escaped = body[i + 1 : i + 2]
        if escaped not in _ESCAPES:
            raise StatusParseError(path, "Invalid escape in quoted path")
        out += _ESCAPES[escaped]
        i += 2
    return out.decode("utf-8", errors="replace")


class _StatusBuilder:
    def __init__(self, repo_path: Path, sha: str) -> None:
        self.repo_path = repo_path
        self.sha = sha
        self.branch = ""
        self.upstream: str | None = None
        self.ahead = 0
        self.behind = 0
        self.files: list[StatusEntry] = []

    def add(self, xy: str, file_name: str, original_file_name: str | None = None) -> None:
        self.files.append(
            StatusEntry.from_porcelain(
                self.repo_path,
                xy,
                unquote_path(file_name),
                unquote_path(original_file_name) if original_file_name else None,
            )
        )

    def build(self) -> RepositoryStatus:
        return RepositoryStatus(
            repo_path=self.repo_path,
            branch=self.branch,
            sha=self.sha,
            files=self.files,
            upstream_state=UpstreamState(ahead=self.ahead, behind=self.behind),
            upstream=self.upstream,
        )


def _parse_v1_branch(builder: _StatusBuilder, line: str) -> None:
    match = V1_BRANCH_RE.match(line)
    if not match:
        raise StatusParseError(line, "Invalid branch header")
    builder.branch = match.group("branch")
    builder.upstream = match.group("upstream")
    tracking = match.group("tracking") or ""
    ahead = AHEAD_RE.search(tracking)
    behind = BEHIND_RE.search(tracking)
    builder.ahead = int(ahead.group(1)) if ahead else 0
    builder.behind = int(behind.group(1)) if behind else 0


def _parse_v1_entry(builder: _StatusBuilder, line: str) -> None:
    if len(line) < 4 or line[2] != " ":
        raise StatusParseError(line, "Invalid status entry")
    xy = line[:2]
    path = line[3:]
    original = None
    if path.startswith('"'):
        end = _closing_quote(path, line)
        head, rest = path[: end + 1], path[end + 1 :]
        if rest.startswith(" -> "):
            original, path = head, rest[4:]
        elif rest:
            raise StatusParseError(line, "Invalid status entry")
    elif ("R" in xy or "C" in xy) and " -> " in path:
        original, _, path = path.partition(" -> ")
    builder.add(xy, path, original)


def _closing_quote(path: str, line: str) -> int:
    """Index of the quote that ends a quoted path starting at index 0."""
    i = 1
    while i < len(path):
        if path[i] == "\\":
            i += 2
        elif path[i] == '"':
            return i
        else:
            i += 1
    raise StatusParseError(line, "Unterminated quoted path")


def _parse_v2_header(builder: _StatusBuilder, line: str) -> None:
    key, _, value = line[2:].partition(" ")
    if key == "branch.oid":
        if value != "(initial)":
            builder.sha = value
    elif key == "branch.head":
        builder.branch = value
    elif key == "branch.upstream":
        builder.upstream = value
    elif key == "branch.ab":
        match = V2_AB_RE.match(value)
        if not match:
            raise StatusParseError(line, "Invalid ahead/behind header")
        builder.ahead = int(match.group(1))
        builder.behind = int(match.group(2))


def _parse_v2_entry(builder: _StatusBuilder, line: str) -> None:
    kind = line[:1]
    if kind in ("?", "!"):
        if len(line) < 3:
            raise StatusParseError(line, "Invalid status entry")
        builder.add(kind * 2, line[2:])
        return

    field_count = {"1": 8, "2": 9, "u": 10}.get(kind)
    if field_count is None:
        raise StatusParseError(line, "Unknown status entry type")
    parts = line.split(" ", field_count)
    if len(parts) != field_count + 1 or len(parts[1]) != 2:
        raise StatusParseError(line, "Invalid status entry")
    xy = parts[1]
    path = parts[-1]
    if kind == "2":
        path, sep, original = path.partition("\t")
        if not sep:
            raise StatusParseError(line, "Missing original path")
        builder.add(xy, path, original)
    else:
        builder.add(xy, path)


def parse_status(text: str, repo_path: Path, sha: str = "") -> RepositoryStatus | None:
    """Parse porcelain v1 or v2 status output into a RepositoryStatus.

    Returns None when there is no output at all.
    """
    if not text.strip():
        return None

    builder = _StatusBuilder(repo_path, sha)
    for line in text.splitlines():
        if not line.strip():
            continue
        if line.startswith("## "):
            _parse_v1_branch(builder, line)
        elif line.startswith("# "):
            _parse_v2_header(builder, line)
        elif line[:2] in ("1 ", "2 ", "u ", "? ", "! "):
            _parse_v2_entry(builder, line)
        else:
            _parse_v1_entry(builder, line)

    return builder.build()
