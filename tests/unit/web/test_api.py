"""
Tests de l'API JSON (FastAPI TestClient).

L'application est construite avec un Container mocke dont les services
reposent sur les faux en memoire.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from vidselect.core.errors import PersistenceError, UnexpectedError
from vidselect.web.app import create_app


@pytest.fixture
def container(selection_service, catalog_service, admin_service) -> MagicMock:
    container = MagicMock()
    container.database.init = MagicMock()
    container.mail_client.return_value = None
    container.selection_service.return_value = selection_service
    container.catalog_service.return_value = catalog_service
    container.customer_admin_service.return_value = admin_service
    return container


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as client:
        yield client


class TestLifespan:
    def test_database_initialized(self, client, container):
        container.database.init.assert_called_once()

    def test_mail_client_closed_on_shutdown(self, container):
        mail_client = MagicMock()
        mail_client.close = AsyncMock()
        container.mail_client.return_value = mail_client
        with TestClient(create_app(container)):
            pass
        mail_client.close.assert_awaited_once()


class TestCatalogRoutes:
    def test_months(self, client):
        response = client.get("/api/videos/months")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": ["2025-02", "2025-01"]}

    def test_by_month_without_customer(self, client):
        data = client.get("/api/videos/by-month/2025-01").json()["data"]
        assert data["batch"]["month"] == "2025-01"
        assert data["videos"][0]["titleEn"] == "Drama X (EN)"
        assert data["videos"][0]["state"] is None

    def test_by_month_with_customer_state(self, client, list_repo):
        list_repo.seed("cust-1", "A1", month="2025-01")
        data = client.get("/api/videos/by-month/2025-02", params={"customer_id": "cust-1"}).json()[
            "data"
        ]
        states = {video["id"]: video["state"] for video in data["videos"]}
        assert states == {"B1": "owned", "B2": "available"}
        assert data["summary"]["currentTotal"] == 1
        assert data["hasPendingChanges"] is False

    def test_unknown_month(self, client):
        data = client.get("/api/videos/by-month/2030-01").json()["data"]
        assert data == {"batch": None, "videos": []}


class TestCustomerListRoutes:
    def test_toggle_pending_and_discard(self, client):
        response = client.post("/api/customer-list/cust-1/toggle", json={"videoId": "V2"})
        assert response.status_code == 200
        assert response.json()["data"]["state"] == "pending_add"
        assert response.json()["data"]["summary"]["newTotal"] == 1

        pending = client.get("/api/customer-list/cust-1/pending").json()["data"]
        assert pending["add"] == ["V2"]
        assert pending["addTitles"] == ["Movie Two"]
        assert pending["hasPendingChanges"] is True

        assert client.delete("/api/customer-list/cust-1/pending").json() == {
            "success": True,
            "data": None,
        }
        assert client.get("/api/customer-list/cust-1/pending").json()["data"]["add"] == []

    def test_toggle_unknown_video_is_400(self, client):
        response = client.post("/api/customer-list/cust-1/toggle", json={"videoId": "nope"})
        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"

    def test_submit(self, client, list_repo):
        list_repo.seed("cust-1", "V1", month="2025-01")
        client.post("/api/customer-list/cust-1/toggle", json={"videoId": "V2"})
        client.post("/api/customer-list/cust-1/toggle", json={"videoId": "V1"})

        response = client.post("/api/customer-list/cust-1/submit", json={"actorId": "admin-1"})

        data = response.json()["data"]
        assert data["outcome"] == "submitted"
        assert data["added"] == 1
        assert data["removed"] == 1
        assert data["totalCount"] == 1
        assert data["snapshotId"] == "snap-1"

        owned = client.get("/api/customer-list/cust-1").json()["data"]
        assert owned["videoIds"] == ["V2"]
        assert owned["totalCount"] == 1
        assert list(owned["groupedByMonth"]) == ["2025-01"]

    def test_submit_without_body(self, client):
        response = client.post("/api/customer-list/cust-1/submit")
        assert response.status_code == 200
        assert response.json()["data"]["outcome"] == "nothing_to_submit"

    def test_submit_persistence_failure_is_503(self, client, list_repo):
        client.post("/api/customer-list/cust-1/toggle", json={"videoId": "V2"})
        list_repo.fail("upsert_videos")
        response = client.post("/api/customer-list/cust-1/submit", json={})
        assert response.status_code == 503
        assert response.json()["error"] == "PersistenceError"

    def test_unexpected_failure_is_500(self, client, list_repo):
        client.post("/api/customer-list/cust-1/toggle", json={"videoId": "V2"})
        list_repo.fail("upsert_videos", RuntimeError("boom"))
        response = client.post("/api/customer-list/cust-1/submit", json={})
        assert response.status_code == 500
        assert response.json()["error"] == UnexpectedError.__name__

    def test_history_and_clear(self, client, list_repo):
        list_repo.seed("cust-1", "V1", month="2025-01")

        response = client.delete("/api/customer-list/cust-1/clear", params={"actor_id": "admin-1"})
        assert response.json()["data"] == {"removed": 1, "snapshotId": "snap-1"}

        history = client.get("/api/customer-list/cust-1/history", params={"limit": 5}).json()["data"]
        assert history[0]["triggerAction"] == "admin_clear"
        assert history[0]["removedVideos"][0]["videoId"] == "V1"

    def test_history_invalid_limit(self, client):
        assert client.get("/api/customer-list/cust-1/history", params={"limit": 0}).status_code == 422

    def test_clear_read_failure_is_503(self, client, list_repo):
        list_repo.fail("list_owned", PersistenceError("db down"))
        response = client.delete("/api/customer-list/cust-1/clear")
        assert response.status_code == 503
        assert response.json() == {"error": "PersistenceError", "message": "db down"}
