"""Tests for the settings persistence layer."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tests.helpers import make_tracker
from trackedit.settings import SettingsStore, TrackerSettings
from trackedit.tracking import init_tracker


def test_load_returns_defaults_when_file_missing(tmp_path: Path) -> None:
    store = SettingsStore(tmp_path / "settings.json")

    assert store.load() == TrackerSettings()


def test_save_and_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    original = TrackerSettings(default_author="ana", check_invariants=False, log_level="DEBUG")

    SettingsStore(path).save(original)
    reloaded = SettingsStore(path).load()

    assert reloaded == original
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    assert not path.with_suffix(".tmp").exists()


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"default_author": "bo", "theme": "dark"}), encoding="utf-8")

    assert SettingsStore(path).load().default_author == "bo"


def test_invalid_json_falls_back_to_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="trackedit.settings"):
        settings = SettingsStore(path).load()

    assert settings == TrackerSettings()
    assert "not valid JSON" in caplog.text


def test_runtime_overrides_apply_before_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    SettingsStore(path).save(TrackerSettings(default_author="disk"))
    monkeypatch.setenv("TRACKEDIT_CHECK_INVARIANTS", "off")
    monkeypatch.setenv("TRACKEDIT_DEBUG_LOGGING", "yes")

    settings = SettingsStore(path).load(overrides={"default_author": "cli", "log_level": None, "bogus": 1})

    assert settings.default_author == "cli"
    assert settings.log_level == "INFO"
    assert settings.check_invariants is False
    assert settings.debug_logging is True


def test_env_author_takes_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRACKEDIT_AUTHOR", "env-author")

    settings = SettingsStore(tmp_path / "settings.json").load(overrides={"default_author": "cli"})

    assert settings.default_author == "env-author"
    assert init_tracker(settings=settings).author == "env-author"


@pytest.mark.parametrize(
    "settings, expected",
    [
        (TrackerSettings(), logging.INFO),
        (TrackerSettings(log_level="warning"), logging.WARNING),
        (TrackerSettings(log_level="chatty"), logging.INFO),
        (TrackerSettings(log_level="ERROR", debug_logging=True), logging.DEBUG),
    ],
)
def test_effective_log_level(settings: TrackerSettings, expected: int) -> None:
    assert settings.effective_log_level == expected


def test_tracker_uses_explicit_author_over_default() -> None:
    state = init_tracker("me", settings=TrackerSettings(default_author="someone"))

    assert state.author == "me"
    assert make_tracker("foo").state.settings.check_invariants
