from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtCore", reason="PySide6 is required for settings tests", exc_type=ImportError)
pytest.importorskip("PySide6.QtTest", reason="Qt test helpers not available", exc_type=ImportError)

from PySide6.QtTest import QSignalSpy

from turbogrid.errors import SettingsLoadError, SettingsValidationError
from turbogrid.settings.manager import SettingsManager
from turbogrid.settings.schema import DEFAULT_SETTINGS, merge_with_defaults


def test_settings_manager_roundtrip(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    assert settings_path.exists()
    assert manager.get("viewport.rows_per_page") == 60

    spy = QSignalSpy(manager.settingsChanged)
    manager.set("viewport.rows_per_page", 120)
    qapp.processEvents()

    assert spy.count() == 1
    assert manager.get("viewport.rows_per_page") == 120
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["viewport"]["rows_per_page"] == 120


def test_nested_updates_preserve_defaults(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"viewport": {"visible_cols": 9}}), encoding="utf-8")
    manager = SettingsManager(path=settings_path)
    manager.load()

    assert manager.get("viewport.visible_cols") == 9
    assert manager.get("viewport.drag_threshold") == 5
    assert manager.get("demo.total_cols") == 1_000_000_000


def test_invalid_value_is_rejected_and_not_persisted(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()

    with pytest.raises(SettingsValidationError):
        manager.set("viewport.rows_per_page", 0)

    assert manager.get("viewport.rows_per_page") == 60
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["viewport"]["rows_per_page"] == 60


def test_corrupt_file_raises_load_error(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_get_missing_key_returns_default(tmp_path: Path, qapp) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    assert manager.get("viewport.nope", "fallback") == "fallback"


def test_merge_with_defaults_does_not_mutate_defaults() -> None:
    merged = merge_with_defaults({"demo": {"latency_ms": 25}})
    assert merged["demo"]["latency_ms"] == 25
    assert DEFAULT_SETTINGS["demo"]["latency_ms"] == 0
