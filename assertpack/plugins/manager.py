"""Fan assertion events out to plugins without letting them break assertions."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any
import warnings

from assertpack.plugins.base import AssertionEndEvent, AssertionStartEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    """A plugin hook that raised while observing an assertion."""

    plugin: str
    hook: str
    assertion: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_MAX_DIAGNOSTICS = 100


@dataclass(slots=True)
class PluginManager:
    """Runs plugin hooks and keeps the most recent hook failures.

    Only the last ``max_diagnostics`` failures are kept; older ones are counted
    in ``dropped_diagnostics``.
    """

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)
    max_diagnostics: int = DEFAULT_MAX_DIAGNOSTICS
    dropped_diagnostics: int = 0

    @property
    def plugin_names(self) -> tuple[str, ...]:
        return tuple(_plugin_name(plugin) for plugin in self.plugins)

    def on_assert_start(self, event: AssertionStartEvent) -> None:
        self._notify("on_assert_start", event.assertion, event)

    def on_assert_end(self, event: AssertionEndEvent) -> None:
        self._notify("on_assert_end", event.assertion, event)

    def drain_diagnostics(self) -> list[PluginDiagnostic]:
        """Return and forget the diagnostics collected so far."""
        drained = list(self.diagnostics)
        self.diagnostics.clear()
        return drained

    def _notify(self, hook: str, assertion: str, event: object) -> None:
        for plugin in self.plugins:
            handler = getattr(plugin, hook, None)
            if not callable(handler):
                continue
            try:
                handler(event)
            except Exception as error:
                self._record_failure(plugin, hook, assertion, error)

    def _record_failure(self, plugin: object, hook: str, assertion: str, error: Exception) -> None:
        diagnostic = PluginDiagnostic(
            plugin=_plugin_name(plugin),
            hook=hook,
            assertion=assertion,
            error=f"{type(error).__name__}: {error}",
        )
        self.diagnostics.append(diagnostic)
        overflow = len(self.diagnostics) - max(self.max_diagnostics, 0)
        if overflow > 0:
            del self.diagnostics[:overflow]
            self.dropped_diagnostics += overflow
        warnings.warn(
            f"assertkit plugin failure: plugin={diagnostic.plugin} hook={hook} "
            f"assertion={assertion} error={diagnostic.error}",
            RuntimeWarning,
            stacklevel=4,
        )


def _plugin_name(plugin: object) -> str:
    return str(getattr(plugin, "name", type(plugin).__name__))
