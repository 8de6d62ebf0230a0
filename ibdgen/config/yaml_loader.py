"""YAML access for generator defaults and run files.

``defaults.yaml`` mirrors ibdgen.config.defaults so the shipped values can be
inspected or overridden without touching Python code. User run files share
the same section layout (spectrum / sampling / detector).
This module imports nothing else from ibdgen.config.

Usage:
    from ibdgen.config.yaml_loader import get_default
    n_cos = get_default('sampling.n_cos')
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

DEFAULTS_ENV_VAR = "IBDGEN_DEFAULTS_PATH"

_DEFAULTS: dict[str, Any] | None = None


def _defaults_path() -> Path:
    """Location of the defaults file.

    ``$IBDGEN_DEFAULTS_PATH`` wins when it names an existing file, otherwise
    the ``defaults.yaml`` shipped next to this module is used.

    Raises:
        FileNotFoundError: If neither file exists.
    """
    override = os.getenv(DEFAULTS_ENV_VAR)
    if override and Path(override).exists():
        return Path(override)

    packaged = Path(__file__).with_name("defaults.yaml")
    if not packaged.exists():
        raise FileNotFoundError(
            f"Missing packaged defaults {packaged}; point {DEFAULTS_ENV_VAR} at a copy"
        )
    return packaged


def load_yaml_file(path: str | Path) -> dict[str, Any]:
    """Parse a YAML file whose top level is a mapping.

    Args:
        path: File to read

    Returns:
        Parsed mapping, ``{}`` for an empty document

    Raises:
        FileNotFoundError: If the file does not exist.
        TypeError: If the document is a list or scalar.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def _loaded() -> dict[str, Any]:
    global _DEFAULTS
    if _DEFAULTS is None:
        _DEFAULTS = load_yaml_file(_defaults_path())
    return _DEFAULTS


def get_defaults() -> dict[str, Any]:
    """Shallow copy of every section in defaults.yaml.

    Example:
        >>> get_defaults()['sampling']['batch_size']
        256
    """
    return dict(_loaded())


def get_default(key_path: str, default: Any = None) -> Any:
    """Look up one default by dotted path, e.g. ``'detector.half_z'``.

    Missing keys and null values give ``default``.

    Example:
        >>> get_default('sampling.n_cos')
        81
        >>> get_default('sampling.unknown', 0)
        0
    """
    node: Any = _loaded()
    for part in key_path.split("."):
        if not isinstance(node, dict) or node.get(part) is None:
            return default
        node = node[part]
    return node


def reload_defaults() -> None:
    """Drop the cached defaults and read the file again."""
    global _DEFAULTS
    _DEFAULTS = load_yaml_file(_defaults_path())
