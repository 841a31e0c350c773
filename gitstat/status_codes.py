"""Git status codes and their display tables."""

from enum import Enum

from gitstat.text import GlyphChars


class StatusCode(str, Enum):
    """Single-character file status codes reported by git."""

    IGNORED = "!"
    UNTRACKED = "?"
    ADDED = "A"
    COPIED = "C"
    DELETED = "D"
    MODIFIED = "M"
    RENAMED = "R"
    TYPE_CHANGED = "T"
    CONFLICTED = "U"
    UNKNOWN = "X"
    BROKEN = "B"

    def __str__(self) -> str:
        return self.value


UNKNOWN_ICON = "icon-status-unknown.svg"
UNKNOWN_TEXT = "unknown"


def parse_status_code(char: str) -> StatusCode | str | None:
    """Map one porcelain status character to a code, or None for no change."""
    if char in (" ", ".", ""):
        return None
    try:
        return StatusCode(char)
    except ValueError:
        return char


def get_status_octicon(status: StatusCode | str | None, missing: str = GlyphChars.SPACE * 4) -> str:
    if status == StatusCode.IGNORED:
        return "$(diff-ignored)"
    if status in (StatusCode.UNTRACKED, StatusCode.ADDED, StatusCode.COPIED):
        return "$(diff-added)"
    if status == StatusCode.DELETED:
        return "$(diff-removed)"
    if status in (StatusCode.MODIFIED, StatusCode.TYPE_CHANGED):
        return "$(diff-modified)"
    if status == StatusCode.RENAMED:
        return "$(diff-renamed)"
    if status == StatusCode.CONFLICTED:
        return "$(alert)"
    if status in (StatusCode.UNKNOWN, StatusCode.BROKEN):
        return "$(question)"
    return missing


def get_status_icon(status: StatusCode | str | None) -> str:
    if status == StatusCode.IGNORED:
        return "icon-status-ignored.svg"
    if status == StatusCode.UNTRACKED:
        return "icon-status-untracked.svg"
    if status == StatusCode.ADDED:
        return "icon-status-added.svg"
    if status == StatusCode.COPIED:
        return "icon-status-copied.svg"
    if status == StatusCode.DELETED:
        return "icon-status-deleted.svg"
    if status in (StatusCode.MODIFIED, StatusCode.TYPE_CHANGED):
        return "icon-status-modified.svg"
    if status == StatusCode.RENAMED:
        return "icon-status-renamed.svg"
    if status == StatusCode.CONFLICTED:
        return "icon-status-conflict.svg"
    return UNKNOWN_ICON


def get_status_text(status: StatusCode | str | None) -> str:
    if status == StatusCode.IGNORED:
        return "ignored"
    if status == StatusCode.UNTRACKED:
        return "untracked"
    if status == StatusCode.ADDED:
        return "added"
    if status == StatusCode.COPIED:
        return "copied"
    if status == StatusCode.DELETED:
        return "deleted"
    if status in (StatusCode.MODIFIED, StatusCode.TYPE_CHANGED):
        return "modified"
    if status == StatusCode.RENAMED:
        return "renamed"
    if status == StatusCode.CONFLICTED:
        return "conflict"
    return UNKNOWN_TEXT
