"""Unit tests for SettingsStore persistence."""

from __future__ import annotations

import pytest

from ttime.exceptions import SettingsError
from ttime.settings import SettingsStore


def test_get_missing_key_returns_none():
    store = SettingsStore()
    assert store.get("NoGaps") is None
    assert "NoGaps" not in store


def test_set_then_get_round_trip():
    store = SettingsStore()
    store.set("NoGaps", {"enabled": False})
    assert store.get("NoGaps") == {"enabled": False}
    assert len(store) == 1


def test_save_and_load_yaml(tmp_path):
    path = tmp_path / "conf" / "settings.yml"
    store = SettingsStore({"weight": {"NoGaps": 2.5}, "free_days": {"days": [0, 4]}})

    store.save(path)
    loaded = SettingsStore.load(path)

    assert loaded.as_dict() == store.as_dict()
    assert loaded.path == path
    assert not (path.parent / "settings.yml.tmp").exists()


def test_load_missing_file_is_empty(tmp_path):
    store = SettingsStore.load(tmp_path / "absent.yml")
    assert len(store) == 0
    assert store.path == tmp_path / "absent.yml"


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(SettingsError):
        SettingsStore.load(path)


def test_load_rejects_invalid_yaml(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("weight: {NoGaps: [\n")
    with pytest.raises(SettingsError):
        SettingsStore.load(path)


def test_save_without_path_raises():
    with pytest.raises(SettingsError):
        SettingsStore().save()
