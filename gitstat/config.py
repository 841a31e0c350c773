"""Display settings stored in the repository."""

import dataclasses
import json
from pathlib import Path
from typing import cast

from gitstat.models import FormatOptions

SECTIONS = ("diff", "upstream")

_FIELD_TYPES: dict[str, type] = {
    "empty": str,
    "expand": bool,
    "prefix": str,
    "separator": str,
}


class ConfigError(Exception):
    """Settings file is missing required structure or has bad values."""


def _settings_path(repo_root: Path) -> Path:
    return repo_root / ".gitstat" / "settings.json"


def _load_settings(repo_root: Path) -> dict[str, object]:
    path = _settings_path(repo_root)
    if not path.is_file():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid settings format in {path}")
    return raw


def _expect_object_dict(value: object, section: str) -> dict[str, object]:
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid {section} section in settings.")
    return cast(dict[str, object], value)


def _expect_options(value: dict[str, object], section: str) -> dict[str, object]:
    options: dict[str, object] = {}
    for key, item in value.items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"Unknown option {key!r} in {section} section.")
        if not isinstance(item, expected):
            raise ConfigError(f"Option {key!r} in {section} section must be {expected.__name__}.")
        options[key] = item
    return options


def load_format_options(repo_root: Path, section: str) -> FormatOptions:
    """Return the format options for a section, merged over the defaults."""
    if section not in SECTIONS:
        raise ConfigError(f"Unknown settings section {section!r}.")

    settings = _load_settings(repo_root)
    section_raw = settings.get(section)
    if section_raw is None:
        return FormatOptions()
    values = _expect_options(_expect_object_dict(section_raw, section), section)
    return dataclasses.replace(FormatOptions(), **values)


def apply_overrides(options: FormatOptions, **overrides: object) -> FormatOptions:
    """Replace the options given explicitly, ignoring the ones left as None."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return dataclasses.replace(options, **values)
