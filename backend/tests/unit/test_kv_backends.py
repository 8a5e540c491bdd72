"""
Unit tests for the key-value backends.
"""

import json

import pytest

from riskeval.services import (
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    KeyValueBackend,
    KeyValueBackendError,
    QuotaExceededError,
)


class TestInMemoryBackend:

    def test_basic_operations(self):
        backend = InMemoryKeyValueBackend()
        backend.set("a", "1")
        backend.set("a", "2")

        assert backend.get("a") == "2"
        assert backend.keys() == ["a"]

        backend.delete("a")
        backend.delete("a")

        assert backend.get("a") is None

    def test_quota_rejects_write_and_keeps_previous_state(self):
        backend = InMemoryKeyValueBackend(quota_bytes=10)
        backend.set("k", "12345")

        with pytest.raises(QuotaExceededError):
            backend.set("x", "123456789")

        assert backend.keys() == ["k"]

    def test_overwrite_counts_only_new_value(self):
        backend = InMemoryKeyValueBackend(quota_bytes=10)
        backend.set("k", "123456789")
        backend.set("k", "987654321")

        assert backend.get("k") == "987654321"

    def test_satisfies_protocol(self):
        assert isinstance(InMemoryKeyValueBackend(), KeyValueBackend)


class TestJsonFileBackend:

    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "store" / "risks.json"
        JsonFileKeyValueBackend(path).set("riesgo_1", '{"id": 1}')

        reopened = JsonFileKeyValueBackend(path)

        assert reopened.get("riesgo_1") == '{"id": 1}'
        assert json.loads(path.read_text(encoding="utf-8")) == {"riesgo_1": '{"id": 1}'}

    def test_delete_missing_key_does_not_write(self, tmp_path):
        path = tmp_path / "risks.json"
        backend = JsonFileKeyValueBackend(path)
        backend.delete("nothing")

        assert not path.exists()

    def test_corrupt_file_is_set_aside_and_medium_starts_empty(self, tmp_path):
        path = tmp_path / "risks.json"
        path.write_text("{not json", encoding="utf-8")
        backend = JsonFileKeyValueBackend(path)

        assert backend.keys() == []
        assert backend.quarantine_path.read_text(encoding="utf-8") == "{not json"

        backend.set("riesgo_1", "{}")

        assert backend.quarantine_path.read_text(encoding="utf-8") == "{not json"
        assert json.loads(path.read_text(encoding="utf-8")) == {"riesgo_1": "{}"}

    def test_non_object_document_is_set_aside(self, tmp_path):
        path = tmp_path / "risks.json"
        path.write_text("[1, 2]", encoding="utf-8")
        backend = JsonFileKeyValueBackend(path)

        assert backend.keys() == []
        assert not path.exists()
        assert backend.quarantine_path.exists()

    def test_unmovable_corrupt_file_raises_backend_error(self, tmp_path, monkeypatch):
        path = tmp_path / "risks.json"
        path.write_text("{not json", encoding="utf-8")

        def _refuse(*args, **kwargs):
            raise PermissionError("read-only directory")

        monkeypatch.setattr("riskeval.services.kv_backends.os.replace", _refuse)

        with pytest.raises(KeyValueBackendError):
            JsonFileKeyValueBackend(path).keys()
        assert path.read_text(encoding="utf-8") == "{not json"

    def test_no_temp_files_left_behind(self, tmp_path):
        backend = JsonFileKeyValueBackend(tmp_path / "risks.json")
        backend.set("a", "1")
        backend.set("b", "2")
        backend.delete("a")

        assert [p.name for p in tmp_path.iterdir()] == ["risks.json"]
