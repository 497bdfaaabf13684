#!/usr/bin/env python3
"""
Configuration loading for interface inference.

Settings live in the [inference] table of interface_inference.toml.
"""

import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from infer_interfaces import DEFAULT_ROOT_NAME, RenderOptions

DEFAULT_CONFIG_NAME = "interface_inference.toml"


class InterfaceConfigError(ValueError):
    """A configuration value has the wrong type or range."""


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Optional[Path] = None, config_path: Optional[Path] = None) -> Dict[str, Any]:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def inference_defaults(root: Optional[Path] = None, config_path: Optional[Path] = None) -> Dict[str, Any]:
    data = load_config(root=root, config_path=config_path)
    section = data.get("inference", {})
    return section if isinstance(section, dict) else {}


def root_name_from_config(section: Dict[str, Any]) -> str:
    value = section.get("root_name", DEFAULT_ROOT_NAME)
    if not isinstance(value, str) or not value:
        raise InterfaceConfigError(f"root_name must be a non-empty string, got {value!r}")
    return value


def render_options_from_config(section: Dict[str, Any]) -> RenderOptions:
    """Build RenderOptions from an [inference] table."""
    defaults = RenderOptions()

    indent = section.get("indent", defaults.indent)
    if isinstance(indent, bool) or not isinstance(indent, int) or indent < 0:
        raise InterfaceConfigError(f"indent must be a non-negative integer, got {indent!r}")

    export = section.get("export", defaults.export)
    if not isinstance(export, bool):
        raise InterfaceConfigError(f"export must be true or false, got {export!r}")

    return RenderOptions(indent=indent, export=export)
