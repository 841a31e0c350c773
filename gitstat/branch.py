"""Branch name helpers."""

import re

DETACHED_HEAD_RE = re.compile(r"^(?=.*\bHEAD\b)(?=.*\bdetached\b).*$")


def shorten_sha(sha: str, length: int = 7) -> str:
    return sha[:length]


def is_detached(name: str | None) -> bool:
    """Check if a branch name reported by git means a detached HEAD."""
    if not name:
        return False
    if name == "HEAD" or name == "(detached)":
        return True
    if name.startswith("(") and name.endswith(")"):
        return True
    if name.endswith("(no branch)"):
        return True
    return DETACHED_HEAD_RE.match(name) is not None


def format_detached(sha: str) -> str:
    return f"({shorten_sha(sha)}...)"
