"""Pick the plugin manager that observes assertions in the current context."""

from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from contextvars import ContextVar
from functools import lru_cache
import os
from pathlib import Path
from typing import Iterator

from assertpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from assertpack.plugins.loader import load_plugin_manager_from_file
from assertpack.plugins.manager import PluginManager

_override: ContextVar[PluginManager | None] = ContextVar("assertkit_plugin_override", default=None)
_NO_PLUGINS = PluginManager()


def get_active_plugin_manager() -> PluginManager:
    """Return the manager for the current context.

    An explicit :func:`use_plugin_manager` override wins. Otherwise the config
    named by ``ASSERTKIT_PLUGIN_CONFIG`` is loaded once per path.
    """
    override = _override.get()
    if override is not None:
        return override
    config_path = os.environ.get(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _NO_PLUGINS
    return _load_configured(config_path)


@lru_cache(maxsize=8)
def _load_configured(config_path: str) -> PluginManager:
    return load_plugin_manager_from_file(config_path)


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    token = _override.set(manager)
    try:
        yield manager
    finally:
        _override.reset(token)


def use_plugins_from_config(path: str | Path) -> AbstractContextManager[PluginManager]:
    return use_plugin_manager(load_plugin_manager_from_file(path))


def reset_plugin_runtime_cache() -> None:
    """Forget managers loaded from ``ASSERTKIT_PLUGIN_CONFIG``."""
    _load_configured.cache_clear()
