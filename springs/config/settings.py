"""
Solver settings: loaded from YAML, validated once, read-only afterwards.

The bundled defaults live in ``data/settings.yaml``. A user file passed to
load_settings() only needs the keys it changes; everything else falls back to
the bundled values. get_settings() returns the defaults loaded at import.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

import yaml

from springs.counter.registry import list_strategies
from springs.parser.parser import PARSE_POLICIES

_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_SETTINGS_PATH = _DATA_DIR / "settings.yaml"

_SECTIONS: dict[str, tuple[str, ...]] = {
    "unfold": ("multiplicity",),
    "counting": ("strategy",),
    "batch": ("workers", "parse_policy"),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Settings:
    """
    Validated solver settings.

    Attributes:
        multiplicity: Copies produced by the unfold step (>= 1).
        strategy: Registered counting strategy name.
        workers: Worker processes for counting (>= 1; 1 counts inline).
        parse_policy: ``"fail_fast"`` or ``"collect"``.
    """

    multiplicity: int = 5
    strategy: str = "memoized"
    workers: int = 1
    parse_policy: str = "fail_fast"

    def __post_init__(self) -> None:
        if not _is_int(self.multiplicity) or self.multiplicity < 1:
            raise ValueError(f"multiplicity must be an integer >= 1, got {self.multiplicity!r}")
        if not _is_int(self.workers) or self.workers < 1:
            raise ValueError(f"workers must be an integer >= 1, got {self.workers!r}")
        if self.strategy not in list_strategies():
            raise ValueError(
                f"strategy must be one of {list_strategies()}, got {self.strategy!r}"
            )
        if self.parse_policy not in PARSE_POLICIES:
            raise ValueError(
                f"parse_policy must be one of {PARSE_POLICIES}, got {self.parse_policy!r}"
            )

    def replace(self, **overrides: Any) -> Settings:
        """Return a validated copy with *overrides* applied; None values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return dataclasses.replace(self, **changes)


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Settings file not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse settings file {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping, got {type(data).__name__}")
    return cast(dict[str, Any], data)


def _flatten(data: dict[str, Any], path: Path) -> dict[str, Any]:
    """Turn ``{"batch": {"workers": 2}}`` into ``{"workers": 2}``, rejecting unknown keys."""
    errors: list[str] = []
    flat: dict[str, Any] = {}
    for section, values in data.items():
        if section not in _SECTIONS:
            errors.append(f"unknown section {section!r}")
            continue
        if not isinstance(values, dict):
            errors.append(f"section {section!r} must be a mapping")
            continue
        for key, value in values.items():
            if key not in _SECTIONS[section]:
                errors.append(f"unknown key {section}.{key}")
                continue
            flat[key] = value
    if errors:
        raise ValueError(
            f"Invalid settings file {path}:\n" + "\n".join(f"  • {e}" for e in errors)
        )
    return flat


def load_settings(path: Path | str | None = None) -> Settings:
    """Load the bundled defaults, then apply the file at *path* if given.

    Raises:
        FileNotFoundError: If a settings file does not exist.
        ValueError: If a file is not valid YAML, has unknown keys, or holds
            out-of-range values.
    """
    values = _flatten(_load_yaml(DEFAULT_SETTINGS_PATH), DEFAULT_SETTINGS_PATH)
    if path is not None:
        user_path = Path(path)
        values.update(_flatten(_load_yaml(user_path), user_path))
    return Settings(**values)


# ── Module-level singleton ─────────────────────────────────────────────────────

_settings: Settings = load_settings()


def get_settings() -> Settings:
    """Return the bundled default settings."""
    return _settings
