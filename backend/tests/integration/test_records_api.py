"""
Integration tests for the HTTP surface.

Each test gets a fresh container backed by an in-memory medium and drives
the app through FastAPI's TestClient, lifespan included.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from riskeval.main import app
from riskeval.services import (
    InMemoryKeyValueBackend,
    JsonFileKeyValueBackend,
    KeyValueBackendError,
    get_container,
    reset_container,
)


pytestmark = pytest.mark.integration


@pytest.fixture
def medium():
    return InMemoryKeyValueBackend()


@pytest.fixture
def client(medium):
    reset_container()
    get_container().override_backend(medium)
    with TestClient(app) as test_client:
        yield test_client
    reset_container()


def _post(client, form_input, **overrides):
    return client.post("/api/records", json=form_input(**overrides))


class TestRecordsApi:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["records"] == 0

    def test_submit_returns_score_and_tier(self, client, form_input):
        response = _post(client, form_input)

        assert response.status_code == 201
        body = response.json()
        assert body["risk_score"] == 450
        assert body["tier"] == "III"
        assert body["priority"] == 3
        assert body["updated"] is False
        assert body["record"]["severityTier"]["label"] == "improve if feasible"

    def test_wrongly_typed_fields_reach_the_validator(self, client, form_input):
        response = _post(client, form_input, name=None, deficiencyLevel="abc")

        assert response.status_code == 422
        assert response.json()["errors"] == ["Risk name is required", "Deficiency level (ND) must be selected"]

    def test_invalid_submission_returns_errors(self, client, form_input):
        response = _post(client, form_input, name="", area="")

        assert response.status_code == 422
        assert response.json()["errors"] == ["Risk name is required", "Area is required"]
        assert client.get("/api/records").json()["count"] == 0

    def test_list_sorted_by_requested_criterion(self, client, form_input):
        _post(client, form_input, name="Zinc dust", deficiencyLevel=10, exposureLevel=4, consequenceLevel=100)
        _post(client, form_input, name="Acid splash", deficiencyLevel=2, exposureLevel=1, consequenceLevel=10)

        by_priority = client.get("/api/records").json()
        by_name = client.get("/api/records", params={"sort": "name"}).json()

        assert [r["name"] for r in by_priority["records"]] == ["Zinc dust", "Acid splash"]
        assert by_name["criterion"] == "name"
        assert [r["name"] for r in by_name["records"]] == ["Acid splash", "Zinc dust"]

    def test_edit_flow(self, client, form_input, medium):
        record_id = _post(client, form_input).json()["record"]["id"]

        started = client.post(f"/api/records/{record_id}/edit")
        assert started.status_code == 200
        assert started.json()["form"]["consequenceLevel"] == 25
        assert client.get("/api/records/edit").json()["editing_id"] == record_id

        updated = _post(client, form_input, consequenceLevel=100)

        assert updated.json()["updated"] is True
        assert updated.json()["record"]["id"] == record_id
        assert updated.json()["risk_score"] == 1800
        assert medium.keys() == [f"riesgo_{record_id}"]

    def test_edit_unknown_record_is_404(self, client):
        assert client.post("/api/records/123/edit").status_code == 404

    def test_cancel_edit(self, client, form_input):
        record_id = _post(client, form_input).json()["record"]["id"]
        client.post(f"/api/records/{record_id}/edit")

        response = client.delete("/api/records/edit")

        assert response.json()["editing_id"] is None
        assert _post(client, form_input, name="New").json()["updated"] is False

    def test_delete_one_and_all(self, client, form_input, medium):
        ids = [_post(client, form_input, name=f"Risk {i}").json()["record"]["id"] for i in range(5)]

        response = client.delete(f"/api/records/{ids[0]}")
        assert response.json()["remaining"] == 4

        response = client.delete("/api/records")
        assert response.json()["remaining"] == 0
        assert medium.keys() == []

    def test_report(self, client, form_input):
        assert client.get("/api/report").status_code == 409

        _post(client, form_input)
        response = client.get("/api/report")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["filename"].startswith("Informe_Riesgos_NTP330_")
        assert "Falling objects" in body["markdown"]


@pytest.mark.asyncio
class TestAsyncClient:

    async def test_submit_and_list(self, medium, form_input):
        reset_container()
        get_container().override_backend(medium)
        get_container().record_manager.load()

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
            created = await ac.post("/api/records", json=form_input())
            listed = await ac.get("/api/records", params={"sort": "score"})

        reset_container()
        assert created.status_code == 201
        assert listed.json()["count"] == 1
        assert listed.json()["criterion"] == "score"


class TestPersistence:

    def test_records_survive_restart(self, medium, form_input):
        reset_container()
        get_container().override_backend(medium)
        with TestClient(app) as first:
            first.post("/api/records", json=form_input())

        reset_container()
        get_container().override_backend(medium)
        with TestClient(app) as second:
            records = second.get("/api/records").json()["records"]

        reset_container()
        assert len(records) == 1
        assert records[0]["riskScore"] == 450


class UnreadableBackend(InMemoryKeyValueBackend):
    """Medium whose key listing always fails."""

    def keys(self) -> list[str]:
        raise KeyValueBackendError("medium unavailable")


class TestStartup:

    def test_corrupt_storage_file_does_not_block_startup(self, tmp_path, form_input):
        path = tmp_path / "risks.json"
        path.write_text("{not json", encoding="utf-8")
        backend = JsonFileKeyValueBackend(path)

        reset_container()
        get_container().override_backend(backend)
        with TestClient(app) as client:
            health = client.get("/health").json()
            created = client.post("/api/records", json=form_input())

        reset_container()
        assert health["records"] == 0
        assert created.status_code == 201
        assert backend.quarantine_path.read_text(encoding="utf-8") == "{not json"

    def test_unreadable_medium_starts_with_empty_collection(self):
        reset_container()
        get_container().override_backend(UnreadableBackend())
        with TestClient(app) as client:
            response = client.get("/health")

        reset_container()
        assert response.status_code == 200
        assert response.json()["records"] == 0
