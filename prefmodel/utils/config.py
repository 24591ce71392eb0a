"""YAML configuration for the command-line entry points."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping, Sequence

import yaml


def load_config(config_path: Path) -> Mapping[str, Any]:
    """Parse a YAML configuration file into a nested mapping."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def clone_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of the configuration mapping."""
    return copy.deepcopy(dict(config))


def get_by_dotted_path(config: Mapping[str, Any], dotted_key: str, default: Any = None) -> Any:
    """
    Fetch a value from a nested mapping using dotted-path syntax.

    Examples
    --------
    >>> get_by_dotted_path({"load": {"num_threads": 4}}, "load.num_threads")
    4
    >>> get_by_dotted_path({"load": {}}, "load.seed", 7)
    7
    """
    current: Any = config
    for key in dotted_key.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def set_by_dotted_path(
    config: MutableMapping[str, Any],
    dotted_key: str,
    value: Any,
) -> None:
    """Assign a value inside a nested mapping, creating sections as needed."""
    keys: Sequence[str] = dotted_key.split(".")
    current: MutableMapping[str, Any] = config
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def apply_overrides(config: Mapping[str, Any], overrides: Iterable[str]) -> dict[str, Any]:
    """
    Return a copy of `config` with ``dotted.key=value`` overrides applied.

    Values are parsed as YAML scalars, so ``load.num_threads=8`` sets an int
    and ``data.limit=null`` sets None. The input mapping is left untouched.
    """
    updated = clone_config(config)
    for override in overrides:
        key, sep, raw_value = override.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Override must look like 'dotted.key=value', got {override!r}")
        set_by_dotted_path(updated, key.strip(), yaml.safe_load(raw_value))
    return updated
