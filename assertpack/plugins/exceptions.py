"""Plugin subsystem exceptions."""


class PluginError(Exception):
    """Base class for plugin subsystem errors."""


class PluginConfigError(PluginError):
    """Raised when the plugin config file is malformed."""


class PluginLoadError(PluginError):
    """Raised when a plugin entrypoint cannot be imported or instantiated."""
