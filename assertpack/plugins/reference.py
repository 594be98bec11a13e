"""Reference plugin that records assertion hooks as NDJSON."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path

from assertpack.plugins.base import AssertionEndEvent, AssertionStartEvent, LifecyclePlugin


@dataclass(slots=True)
class AssertionTracePlugin(LifecyclePlugin):
    output_path: str = ".assertkit/assertion-trace.ndjson"
    name: str = "assertion-trace"

    def on_assert_start(self, event: AssertionStartEvent) -> None:
        self._append("on_assert_start", event.to_dict())

    def on_assert_end(self, event: AssertionEndEvent) -> None:
        self._append("on_assert_end", event.to_dict())

    def _append(self, hook: str, event: dict) -> None:
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        record = {"hook": hook, "plugin": self.name, "event": event}
        with path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record, ensure_ascii=True, sort_keys=True, separators=(",", ":")) + "\n")
