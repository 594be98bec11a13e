"""Load lifecycle plugins from a versioned JSON config."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

from assertpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from assertpack.plugins.exceptions import PluginConfigError, PluginLoadError
from assertpack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Build a plugin manager from a JSON config file.

    The file must look like ``{"config_version": 1, "plugins": [...]}`` where
    each plugin entry names a ``module:attribute`` entrypoint.
    """
    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON ({config_path}): {error}") from error

    if not isinstance(raw, dict):
        raise PluginConfigError(f"Plugin config must be a JSON object ({config_path}).")

    if raw.get("config_version") != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {raw.get('config_version')!r}; "
            f"expected {PLUGIN_CONFIG_VERSION}."
        )

    entries = raw.get("plugins")
    if not isinstance(entries, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.")

    plugins = [
        plugin
        for index, entry in enumerate(entries, start=1)
        if (plugin := _load_entry(entry, index=index)) is not None
    ]
    return PluginManager(plugins=tuple(plugins))


def _load_entry(entry: Any, *, index: int) -> object | None:
    if not isinstance(entry, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.")

    unknown = sorted(set(entry) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(f"Plugin entry #{index} has unsupported keys: {', '.join(unknown)}")

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(f"Plugin entry #{index} key 'enabled' must be boolean.")
    if not enabled:
        return None

    entrypoint = entry.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'.")

    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(f"Plugin entry #{index} key 'options' must be a JSON object.")

    target = _resolve_entrypoint(entrypoint, index=index)
    if callable(target):
        try:
            plugin = target(**options)
        except Exception as error:
            raise PluginLoadError(
                f"Plugin entry #{index} failed to instantiate '{entrypoint}': {error}"
            ) from error
    elif options:
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' is not callable and cannot take options."
        )
    else:
        plugin = target

    declared = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    if _major(declared) != _major(PLUGIN_API_VERSION):
        raise PluginLoadError(
            f"Plugin entry #{index} '{entrypoint}' declares api_version {declared!r}; "
            f"supported major version is {_major(PLUGIN_API_VERSION)}."
        )
    return plugin


def _resolve_entrypoint(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as error:
        raise PluginLoadError(
            f"Plugin entry #{index} failed to import module '{module_name}': {error}"
        ) from error

    if not hasattr(module, attribute):
        raise PluginLoadError(
            f"Plugin entry #{index} could not find attribute '{attribute}' in '{module_name}'."
        )
    return getattr(module, attribute)


def _major(version: str) -> str:
    return version.split(".", 1)[0]
