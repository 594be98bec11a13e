import json
from pathlib import Path

import pytest

import assertkit
from assertpack.plugins import (
    PLUGIN_CONFIG_ENV_VAR,
    AssertionEndEvent,
    AssertionStartEvent,
    LifecyclePlugin,
    PluginConfigError,
    PluginLoadError,
    PluginManager,
    get_active_plugin_manager,
    load_plugin_manager_from_file,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)


def _write_plugin_config(
    path: Path,
    *,
    output_path: Path,
    config_version: int = 1,
    entrypoint: str = "assertpack.plugins.reference:AssertionTracePlugin",
) -> Path:
    path.write_text(
        json.dumps(
            {
                "config_version": config_version,
                "plugins": [
                    {
                        "entrypoint": entrypoint,
                        "options": {"output_path": str(output_path)},
                    }
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


def _read_hook_trace(trace_path: Path) -> list[dict]:
    return [
        json.loads(line)
        for line in trace_path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


class RecordingPlugin(LifecyclePlugin):
    name = "recording"

    def __init__(self) -> None:
        self.events: list[object] = []

    def on_assert_start(self, event: AssertionStartEvent) -> None:
        self.events.append(event)

    def on_assert_end(self, event: AssertionEndEvent) -> None:
        self.events.append(event)


def test_hooks_report_pass_fail_and_error() -> None:
    plugin = RecordingPlugin()

    with use_plugin_manager(PluginManager(plugins=(plugin,))):
        assertkit.assert_equal(1, 1)
        with pytest.raises(assertkit.AssertionFailedError):
            assertkit.assert_contains("abc", "z")
        with pytest.raises(assertkit.MessageFormatError):
            assertkit.assert_true(False, "bad %d", "x")

    assert len(plugin.events) == 6
    assert plugin.events[:5] == [
        AssertionStartEvent(assertion="equal"),
        AssertionEndEvent(assertion="equal", status="pass"),
        AssertionStartEvent(assertion="contains"),
        AssertionEndEvent(
            assertion="contains",
            status="fail",
            message='Haystack does not contain needle.\nNeedle: "z"\nHaystack: "abc"',
        ),
        AssertionStartEvent(assertion="true"),
    ]
    errored = plugin.events[-1]
    assert isinstance(errored, AssertionEndEvent)
    assert errored.status == "error"
    assert errored.error_type == "MessageFormatError"


def test_reference_plugin_writes_ndjson_trace(tmp_path: Path) -> None:
    trace_path = tmp_path / "trace.ndjson"
    config_path = _write_plugin_config(tmp_path / "plugins.json", output_path=trace_path)

    with use_plugins_from_config(config_path) as manager:
        assertkit.assert_zero([])
        with pytest.raises(assertkit.AssertionFailedError):
            assertkit.assert_false(True)

    records = _read_hook_trace(trace_path)

    assert [record["hook"] for record in records] == [
        "on_assert_start",
        "on_assert_end",
        "on_assert_start",
        "on_assert_end",
    ]
    assert {record["plugin"] for record in records} == {"assertion-trace"}
    assert records[1]["event"]["status"] == "pass"
    assert records[3]["event"]["status"] == "fail"
    assert records[3]["event"]["assertion"] == "false"
    assert manager.diagnostics == []


def test_plugin_failure_is_isolated_with_diagnostics() -> None:
    class ExplodingPlugin(LifecyclePlugin):
        name = "exploding"

        def on_assert_start(self, _event) -> None:
            raise RuntimeError("boom-from-plugin")

    manager = PluginManager(plugins=(ExplodingPlugin(),))

    with use_plugin_manager(manager):
        with pytest.warns(RuntimeWarning, match="assertkit plugin failure"):
            assertkit.assert_equal([1], [1])

    assert manager.plugin_names == ("exploding",)
    diagnostics = manager.drain_diagnostics()
    assert len(diagnostics) == 1
    assert diagnostics[0].to_dict() == {
        "plugin": "exploding",
        "hook": "on_assert_start",
        "assertion": "equal",
        "error": "RuntimeError: boom-from-plugin",
    }
    assert manager.diagnostics == []


def test_diagnostics_keep_only_the_most_recent_failures() -> None:
    class FlakyPlugin(LifecyclePlugin):
        name = "flaky"

        def on_assert_end(self, event: AssertionEndEvent) -> None:
            raise ValueError(event.assertion)

    manager = PluginManager(plugins=(FlakyPlugin(),), max_diagnostics=2)

    with use_plugin_manager(manager):
        with pytest.warns(RuntimeWarning, match="assertkit plugin failure"):
            assertkit.assert_true(True)
            assertkit.assert_false(False)
            assertkit.assert_zero(0)

    assert [diagnostic.assertion for diagnostic in manager.diagnostics] == ["false", "zero"]
    assert manager.dropped_diagnostics == 1
    assert PluginManager().max_diagnostics == 100


def test_load_plugin_manager_rejects_unsupported_config_version(tmp_path: Path) -> None:
    config_path = _write_plugin_config(
        tmp_path / "plugins-invalid.json",
        output_path=tmp_path / "unused.ndjson",
        config_version=99,
    )
    with pytest.raises(PluginConfigError, match="Unsupported plugin config version"):
        load_plugin_manager_from_file(config_path)


def test_load_plugin_manager_rejects_bad_entrypoints(tmp_path: Path) -> None:
    missing_module = _write_plugin_config(
        tmp_path / "missing-module.json",
        output_path=tmp_path / "unused.ndjson",
        entrypoint="assertpack.no_such_module:Plugin",
    )
    with pytest.raises(PluginLoadError, match="failed to import module"):
        load_plugin_manager_from_file(missing_module)

    missing_attribute = _write_plugin_config(
        tmp_path / "missing-attribute.json",
        output_path=tmp_path / "unused.ndjson",
        entrypoint="assertpack.plugins.reference:NoSuchPlugin",
    )
    with pytest.raises(PluginLoadError, match="could not find attribute"):
        load_plugin_manager_from_file(missing_attribute)

    malformed = tmp_path / "malformed.json"
    malformed.write_text("{not json", encoding="utf-8")
    with pytest.raises(PluginConfigError, match="Invalid plugin config JSON"):
        load_plugin_manager_from_file(malformed)


def test_disabled_entries_are_skipped(tmp_path: Path) -> None:
    config_path = tmp_path / "plugins.json"
    config_path.write_text(
        json.dumps(
            {
                "config_version": 1,
                "plugins": [
                    {
                        "entrypoint": "assertpack.plugins.reference:AssertionTracePlugin",
                        "enabled": False,
                    }
                ],
            }
        ),
        encoding="utf-8",
    )

    assert load_plugin_manager_from_file(config_path).plugins == ()


def test_env_plugin_config_auto_activation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    trace_path = tmp_path / "env-trace.ndjson"
    config_path = _write_plugin_config(tmp_path / "plugins-env.json", output_path=trace_path)
    monkeypatch.setenv(PLUGIN_CONFIG_ENV_VAR, str(config_path))
    reset_plugin_runtime_cache()

    assertkit.assert_has_prefix("assertkit", "assert")
    records = _read_hook_trace(trace_path)

    assert [record["hook"] for record in records] == ["on_assert_start", "on_assert_end"]
    assert records[0]["event"] == {"assertion": "has_prefix"}
    assert get_active_plugin_manager() is get_active_plugin_manager()

    monkeypatch.delenv(PLUGIN_CONFIG_ENV_VAR)
    reset_plugin_runtime_cache()
    assert get_active_plugin_manager().plugins == ()
