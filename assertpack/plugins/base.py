"""Versioned plugin interface and assertion lifecycle events."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "ASSERTKIT_PLUGIN_CONFIG"

AssertionStatus = Literal["pass", "fail", "error"]


@dataclass(frozen=True, slots=True)
class AssertionStartEvent:
    assertion: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AssertionEndEvent:
    assertion: str
    status: AssertionStatus
    message: str | None = None
    error_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class LifecyclePlugin:
    """No-op base for assertion lifecycle plugins (API v1.x)."""

    api_version = PLUGIN_API_VERSION
    name = "lifecycle-plugin"

    def on_assert_start(self, event: AssertionStartEvent) -> None:
        return None

    def on_assert_end(self, event: AssertionEndEvent) -> None:
        return None
