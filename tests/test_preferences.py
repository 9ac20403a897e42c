"""Tests for the JSON-file preference store."""

import json
from pathlib import Path

import pytest

from ethcontacts.domain import ContactStoreError, StoreAccessDenied
from ethcontacts.infrastructure import JsonFilePreferenceStore


def test_missing_file_reads_as_empty(tmp_path):
    store = JsonFilePreferenceStore(tmp_path / "prefs")
    assert store.get_ens_override("1") is None
    assert not store.path.exists()


def test_set_and_get_override_uses_ens_key(tmp_path):
    store = JsonFilePreferenceStore(tmp_path / "prefs")
    store.set_ens_override("42", "vitalik.eth")

    assert store.path == tmp_path / "prefs" / "contact_prefs.json"
    assert json.loads(store.path.read_text(encoding="utf-8")) == {"ENS_42": "vitalik.eth"}
    assert store.get_ens_override("42") == "vitalik.eth"


def test_values_survive_a_new_instance(tmp_path):
    JsonFilePreferenceStore(tmp_path).set_ens_override("1", "a.eth")
    JsonFilePreferenceStore(tmp_path).set_ens_override("2", "b.eth")
    store = JsonFilePreferenceStore(tmp_path)
    assert store.get_ens_override("1") == "a.eth"
    assert store.get_ens_override("2") == "b.eth"


def test_namespaces_are_separate_files(tmp_path):
    JsonFilePreferenceStore(tmp_path, namespace="contact_prefs").put_string("k", "v1")
    other = JsonFilePreferenceStore(tmp_path, namespace="other_prefs")
    assert other.get_string("k") is None
    assert other.path.name == "other_prefs.json"


def test_empty_namespace_rejected(tmp_path):
    with pytest.raises(ValueError):
        JsonFilePreferenceStore(tmp_path, namespace="  ")


def test_corrupt_file_reads_as_empty_and_is_overwritten(tmp_path):
    store = JsonFilePreferenceStore(tmp_path)
    store.path.write_text("{not json", encoding="utf-8")
    assert store.get_ens_override("1") is None
    store.set_ens_override("1", "a.eth")
    assert store.get_ens_override("1") == "a.eth"


def test_non_string_values_are_ignored(tmp_path):
    store = JsonFilePreferenceStore(tmp_path)
    store.path.write_text(json.dumps({"ENS_1": 5}), encoding="utf-8")
    assert store.get_ens_override("1") is None


def test_permission_error_maps_to_access_denied(tmp_path, monkeypatch):
    JsonFilePreferenceStore(tmp_path).set_ens_override("1", "a.eth")
    store = JsonFilePreferenceStore(tmp_path)

    def refuse(self, *args, **kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr(Path, "read_text", refuse)
    with pytest.raises(StoreAccessDenied):
        store.get_ens_override("1")


def test_other_os_error_maps_to_store_error(tmp_path, monkeypatch):
    store = JsonFilePreferenceStore(tmp_path)

    def broken(self, *args, **kwargs):
        raise OSError("disk gone")

    monkeypatch.setattr(Path, "write_text", broken)
    with pytest.raises(ContactStoreError) as excinfo:
        store.set_ens_override("1", "a.eth")
    assert not isinstance(excinfo.value, StoreAccessDenied)


def test_repeated_reads_parse_the_file_once(tmp_path, monkeypatch):
    JsonFilePreferenceStore(tmp_path).set_ens_override("1", "a.eth")
    store = JsonFilePreferenceStore(tmp_path)
    reads = []
    real_read_text = Path.read_text

    def counting(self, *args, **kwargs):
        reads.append(self)
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", counting)
    for contact_id in ("1", "2", "3", "1"):
        store.get_ens_override(contact_id)
    assert len(reads) == 1


def test_external_change_is_picked_up(tmp_path):
    store = JsonFilePreferenceStore(tmp_path)
    store.set_ens_override("1", "a.eth")
    assert store.get_ens_override("1") == "a.eth"

    store.path.write_text(json.dumps({"ENS_1": "changed.eth"}), encoding="utf-8")
    assert store.get_ens_override("1") == "changed.eth"
