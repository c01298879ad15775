from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Iterator, List, Tuple

import pytest

from nav_state.runtime import telemetry

Call = Tuple[str, Tuple[Any, ...]]


class RecordingConfig:
    def __init__(self) -> None:
        self.calls: List[Call] = []

    def __getattr__(self, name: str) -> Any:
        def record(*args: Any) -> "RecordingConfig":
            self.calls.append((name, args))
            return self

        return record


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, List[Tuple[str, str]]]] = []
        self.context: dict[str, str] = {}
        self.entered: List[str] = []

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        del self.context[key]

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.entered.append(f"component:{name}")
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.entered.append(f"profile:{name}")
        yield

    def debug_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("debug", message, pairs))

    def error_with(self, message: str, pairs: List[Tuple[str, str]]) -> None:
        self.records.append(("error", message, pairs))


def make_config_calls(
    monkeypatch: pytest.MonkeyPatch, preset: str | None
) -> List[Call]:
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=RecordingConfig))
    return telemetry.build_config(preset).calls


def make_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_production_preset_writes_buffered_file(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("NAV_STATE_LOG_FILE", raising=False)

    calls = make_config_calls(monkeypatch, "production")

    assert ("with_console_output", (False,)) in calls
    assert ("with_file_output", ("nav_state.log",)) in calls
    assert ("with_buffering", (True,)) in calls
    assert ("with_buffer_size", (2048,)) in calls
    assert ("with_profiling", (True,)) in calls
    assert not any(name == "with_colored_output" for name, _ in calls)


def test_development_preset_logs_debug_to_console(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("NAV_STATE_LOG_FILE", raising=False)

    calls = make_config_calls(monkeypatch, "Development")

    assert ("with_min_level", ("DEBUG",)) in calls
    assert ("with_console_output", (True,)) in calls
    assert not any(name == "with_file_output" for name, _ in calls)


def test_log_file_env_overrides_file_backed_preset(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("NAV_STATE_LOG_FILE", "custom.log")

    calls = make_config_calls(monkeypatch, "performance")

    assert ("with_file_output", ("custom.log",)) in calls
    assert ("with_json_format", (True,)) in calls


def test_unknown_preset_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError, match="staging"):
        make_config_calls(monkeypatch, "staging")


def test_configure_drops_cached_loggers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(telemetry, "tl", SimpleNamespace(Config=RecordingConfig))
    monkeypatch.setattr(telemetry, "_LOGGER_CACHE", {"nav_state": object()})
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)

    telemetry.configure(preset="development")

    assert telemetry._LOGGER_CACHE == {}
    assert isinstance(telemetry._ACTIVE_CONFIG, RecordingConfig)


def test_record_event_emits_structured_debug(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    logger = make_logger(monkeypatch)

    telemetry.record_event("x", data={"index": 2})

    assert logger.records == [("debug", "event::x", [("event", "x"), ("index", "2")])]


def test_span_profiles_block_with_context(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = make_logger(monkeypatch)

    with telemetry.span("commit", component="history", metadata={"size": 3}):
        assert logger.context == {"size": "3"}

    assert logger.entered == ["component:history", "profile:commit"]
    assert logger.context == {}
    assert logger.records == []


def test_span_logs_failure_and_reraises(monkeypatch: pytest.MonkeyPatch) -> None:
    logger = make_logger(monkeypatch)

    with pytest.raises(RuntimeError, match="boom"):
        with telemetry.span("commit", component="history", metadata={"size": 3}):
            raise RuntimeError("boom")

    level, message, pairs = logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert ("span", "commit") in pairs
    assert ("component", "history") in pairs
    assert ("reason", "boom") in pairs
    assert logger.context == {}
