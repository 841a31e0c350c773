"""Data models for gitstat."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, TypeVar

from gitstat import branch as branch_utils
from gitstat import paths
from gitstat.status_codes import (
    StatusCode,
    get_status_icon,
    get_status_octicon,
    get_status_text,
    parse_status_code,
)
from gitstat.text import GlyphChars, pad, pluralize

DEFAULT_PATH_SEPARATOR = pad(GlyphChars.DOT, 2, 2)

T = TypeVar("T")

_TALLY_LOCK = threading.Lock()


@dataclass(frozen=True)
class UpstreamState:
    """Commit counts ahead/behind the upstream branch."""

    ahead: int = 0
    behind: int = 0


@dataclass(frozen=True)
class DiffTally:
    """File counts by kind of change."""

    added: int
    deleted: int
    changed: int


@dataclass(frozen=True)
class FormatOptions:
    """Options shared by the summary formatters."""

    empty: str = ""
    expand: bool = False
    prefix: str = ""
    separator: str = " "


class FieldChange(Enum):
    """Markers for StatusEntry.with_changes fields that are not a new value."""

    KEEP = "keep"
    CLEAR = "clear"


KEEP = FieldChange.KEEP
CLEAR = FieldChange.CLEAR


class StatusEntryLike(Protocol):
    """Anything that carries a file status and a file name."""

    @property
    def status(self) -> StatusCode | str: ...

    @property
    def file_name(self) -> str: ...

    @property
    def original_file_name(self) -> str | None: ...


def format_directory(
    item: StatusEntryLike, include_original: bool = False, relative_to: str | None = None
) -> str:
    directory = paths.get_directory(item.file_name, relative_to)
    if include_original and item.status == StatusCode.RENAMED and item.original_file_name:
        return f"{directory} {pad(GlyphChars.ARROW_LEFT, 1, 1)} {item.original_file_name}"
    return directory


def format_path(
    item: StatusEntryLike,
    separator: str = DEFAULT_PATH_SEPARATOR,
    relative_to: str | None = None,
) -> str:
    return paths.get_formatted_path(item.file_name, separator, relative_to)


def relative_path(item: StatusEntryLike, relative_to: str | None = None) -> str:
    return paths.get_relative_path(item.file_name, relative_to)


def _changed_value(change: T | FieldChange, original: T | None) -> T | None:
    if change is FieldChange.KEEP:
        return original
    if change is FieldChange.CLEAR:
        return None
    return change


@dataclass(frozen=True)
class StatusEntry:
    """Status of a single changed file in the index and the working tree."""

    repo_path: Path
    index_status: StatusCode | str | None
    work_tree_status: StatusCode | str | None
    file_name: str
    original_file_name: str | None = None

    @classmethod
    def from_porcelain(
        cls,
        repo_path: Path,
        xy: str,
        file_name: str,
        original_file_name: str | None = None,
    ) -> StatusEntry:
        """Build an entry from the two-character XY code of git status."""
        if xy in ("??", "!!"):
            return cls(repo_path, None, StatusCode(xy[0]), file_name, original_file_name)
        index_status = parse_status_code(xy[:1])
        work_tree_status = parse_status_code(xy[1:2])
        return cls(repo_path, index_status, work_tree_status, file_name, original_file_name)

    @property
    def status(self) -> StatusCode | str:
        """Staged status if any, else the working tree status."""
        if self.index_status is not None:
            return self.index_status
        if self.work_tree_status is not None:
            return self.work_tree_status
        return StatusCode.UNTRACKED

    @property
    def staged(self) -> bool:
        return self.index_status is not None

    @property
    def uri(self) -> Path:
        return paths.resolve_absolute(self.repo_path, self.file_name)

    def get_formatted_directory(
        self, include_original: bool = False, relative_to: str | None = None
    ) -> str:
        return format_directory(self, include_original, relative_to)

    def get_formatted_path(
        self, separator: str = DEFAULT_PATH_SEPARATOR, relative_to: str | None = None
    ) -> str:
        return format_path(self, separator, relative_to)

    def get_relative_path(self, relative_to: str | None = None) -> str:
        return relative_path(self, relative_to)

    def get_octicon(self) -> str:
        return get_status_octicon(self.status)

    def get_icon(self) -> str:
        return get_status_icon(self.status)

    def get_status_text(self) -> str:
        return get_status_text(self.status)

    def with_changes(
        self,
        index_status: StatusCode | str | FieldChange = FieldChange.KEEP,
        work_tree_status: StatusCode | str | FieldChange = FieldChange.KEEP,
        file_name: str | None = None,
        original_file_name: str | FieldChange = FieldChange.KEEP,
    ) -> StatusEntry:
        """Return a copy with fields kept, cleared or replaced.

        Pass ``CLEAR`` to drop a status or the original file name, a value to
        replace it, or leave the default ``KEEP``. ``file_name`` is replaced
        only when a non-empty name is given.
        """
        return dataclasses.replace(
            self,
            index_status=_changed_value(index_status, self.index_status),
            work_tree_status=_changed_value(work_tree_status, self.work_tree_status),
            file_name=file_name or self.file_name,
            original_file_name=_changed_value(original_file_name, self.original_file_name),
        )


@dataclass(frozen=True)
class CommitStatusEntry:
    """A file status as recorded by a commit."""

    sha: str
    status: StatusCode | str
    file_name: str
    original_file_name: str | None = None
    message: str = ""

    def get_formatted_directory(self, include_original: bool = False) -> str:
        return format_directory(self, include_original)

    def get_status_text(self) -> str:
        return get_status_text(self.status)


@dataclass(frozen=True)
class RepositoryStatus:
    """Status of a repository at its current HEAD."""

    repo_path: Path
    branch: str
    sha: str
    files: list[StatusEntry]
    upstream_state: UpstreamState = field(default_factory=UpstreamState)
    upstream: str | None = None
    detached: bool = field(init=False)
    _tally: DiffTally | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        detached = branch_utils.is_detached(self.branch)
        object.__setattr__(self, "detached", detached)
        if detached:
            object.__setattr__(self, "branch", branch_utils.format_detached(self.sha))

    @property
    def ref(self) -> str:
        """The sha when detached, otherwise the branch name."""
        return self.sha if self.detached else self.branch

    def diff_tally(self) -> DiffTally:
        """Count files by change kind; computed once and reused afterwards."""
        with _TALLY_LOCK:
            if self._tally is None:
                added = deleted = changed = 0
                for entry in self.files:
                    if entry.status in (StatusCode.ADDED, StatusCode.UNTRACKED):
                        added += 1
                    elif entry.status == StatusCode.DELETED:
                        deleted += 1
                    else:
                        changed += 1
                tally = DiffTally(added=added, deleted=deleted, changed=changed)
                object.__setattr__(self, "_tally", tally)
            return self._tally

    def get_diff_status(self, options: FormatOptions | None = None) -> str:
        options = options or FormatOptions()
        if not self.files:
            return options.empty

        tally = self.diff_tally()
        if options.expand:
            parts: list[str] = []
            if tally.added:
                parts.append(f"{pluralize('file', tally.added)} added")
            if tally.changed:
                parts.append(f"{pluralize('file', tally.changed)} changed")
            if tally.deleted:
                parts.append(f"{pluralize('file', tally.deleted)} deleted")
            return f"{options.prefix}{options.separator.join(parts)}"

        sep = options.separator
        return f"{options.prefix}+{tally.added}{sep}~{tally.changed}{sep}-{tally.deleted}"

    def get_upstream_status(self, options: FormatOptions | None = None) -> str:
        return RepositoryStatus.format_upstream_status(self.upstream, self.upstream_state, options)

    @staticmethod
    def format_upstream_status(
        upstream: str | None, state: UpstreamState, options: FormatOptions | None = None
    ) -> str:
        options = options or FormatOptions()
        if upstream is None or (state.ahead == 0 and state.behind == 0):
            return options.empty

        if options.expand:
            parts: list[str] = []
            if state.behind:
                parts.append(f"{pluralize('commit', state.behind)} behind")
            if state.ahead:
                parts.append(f"{pluralize('commit', state.ahead)} ahead")
            return f"{options.prefix}{options.separator.join(parts)}"

        return (
            f"{options.prefix}{state.behind}{GlyphChars.ARROW_DOWN}"
            f"{options.separator}{state.ahead}{GlyphChars.ARROW_UP}"
        )
