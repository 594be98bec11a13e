"""Lifecycle plugins for assertkit assertions."""

from assertpack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    AssertionEndEvent,
    AssertionStartEvent,
    LifecyclePlugin,
)
from assertpack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from assertpack.plugins.loader import load_plugin_manager_from_file
from assertpack.plugins.manager import PluginDiagnostic, PluginManager
from assertpack.plugins.reference import AssertionTracePlugin
from assertpack.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "AssertionStartEvent",
    "AssertionEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "AssertionTracePlugin",
    "load_plugin_manager_from_file",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]
