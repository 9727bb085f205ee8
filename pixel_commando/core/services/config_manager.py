"""
config_manager.py
-----------------
Universal configuration loader for game tuning and service config.

Features:
- Supports .json and .yaml/.yml config files
- Looks up bare filenames in the package config directory
- Recursively merges defaults
- Ignores '_notes' keys for human-readable configs
"""

import os
import json

import yaml

from pixel_commando.core.debug.debug_logger import DebugLogger


# ===========================================================
# Configuration
# ===========================================================

CONFIG_ROOT = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "config")

YAML_EXTENSIONS = (".yaml", ".yml")


# ===========================================================
# Public API
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Load a configuration file.

    Args:
        filename: Filename (resolved against CONFIG_ROOT) or full path
        default_dict: Default fallback config
        strict: If True, raise exception on missing file

    Returns:
        dict: Merged configuration
    """
    if default_dict is None:
        default_dict = {}

    path = resolve_path(filename)

    try:
        if path.endswith(YAML_EXTENSIONS):
            data = _load_yaml(path)
        else:
            data = _load_json(path)

        if not isinstance(data, dict):
            DebugLogger.warn(f"{os.path.basename(path)} is not a mapping - using defaults", category="loading")
            return _merge_dicts(default_dict, {})

        return _merge_dicts(default_dict, data)

    except (json.JSONDecodeError, yaml.YAMLError, FileNotFoundError, IOError) as e:
        if strict:
            raise FileNotFoundError(f"Config not found: {filename}") from e
        DebugLogger.warn(f"Failed to load {path}: {e} - using defaults", category="loading")
        return _merge_dicts(default_dict, {})


def resolve_path(filename):
    """Absolute or existing paths pass through; bare names resolve in CONFIG_ROOT."""
    if os.path.isabs(filename) or os.path.exists(filename):
        return filename
    return os.path.join(CONFIG_ROOT, filename.replace("\\", "/").lstrip("/"))


# ===========================================================
# File Loaders
# ===========================================================

def _load_json(path):
    """Load JSON config file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)}", category="loading")
    return data


def _load_yaml(path):
    """Load YAML config file. Empty documents load as an empty mapping."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)} (YAML)", category="loading")
    return data if data is not None else {}


# ===========================================================
# Merge Utilities
# ===========================================================

def _merge_dicts(default, override):
    """Recursively merge two dicts. Ignores '_notes' keys."""
    merged = {
        key: (_merge_dicts(value, {}) if isinstance(value, dict) else value)
        for key, value in default.items()
    }
    for key, value in override.items():
        if key == "_notes":
            continue
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


# ===========================================================
# Typed Access
# ===========================================================

def config_value(config, path, default, cast=None):
    """
    Read a dotted key such as ``"ads.request_timeout"`` from a merged config.

    Args:
        config: Merged config dict
        path: Dot-separated key path
        default: Returned when the key is missing or cannot be cast
        cast: Optional converter (e.g. float); defaults to type(default)

    Returns:
        The converted value or default
    """
    node = config
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]

    cast = cast or type(default)
    try:
        return cast(node)
    except (TypeError, ValueError):
        DebugLogger.warn(f"Config '{path}' has invalid value {node!r} - using {default!r}", category="loading")
        return default
