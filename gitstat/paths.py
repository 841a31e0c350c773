"""Path helpers for repository-relative file names.

Git reports file names with forward slashes relative to the repository
root, so directory handling here is posix-only. Only ``resolve_absolute``
produces a native path.
"""

import os
import posixpath
from pathlib import Path


def resolve_absolute(base: str | Path, relative: str) -> Path:
    """Resolve a repository-relative file name against the repository root."""
    return Path(os.path.abspath(os.path.join(base, relative)))


def get_directory(file_name: str, relative_to: str | None = None) -> str:
    """Return the directory part of a file name, or "" for top-level files."""
    directory = posixpath.dirname(file_name)
    if relative_to is not None and directory:
        directory = posixpath.relpath(directory, relative_to)
    if not directory or directory == ".":
        return ""
    return directory


def get_formatted_path(file_name: str, separator: str, relative_to: str | None = None) -> str:
    name = posixpath.basename(file_name)
    directory = get_directory(file_name, relative_to)
    if not directory:
        return name
    return f"{name}{separator}{directory}"


def get_relative_path(file_name: str, relative_to: str | None = None) -> str:
    name = posixpath.basename(file_name)
    directory = get_directory(file_name, relative_to)
    if not directory:
        return name
    return posixpath.join(directory, name)
