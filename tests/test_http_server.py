import pytest
from fastapi.testclient import TestClient

from plga_calendar.domain import StorageError
from plga_calendar.services.http import create_app


class BrokenRepository:
    def insert(self, activity):
        raise StorageError("disk full")

    def find_overlapping(self, window):
        raise StorageError("disk full")

    def delete_by_id(self, activity_id):
        raise StorageError("disk full")


@pytest.fixture
def client(api_state, settings):
    return TestClient(create_app(api_state, settings=settings))


def _create(client, **fields):
    payload = {"startDate": "2025-03-10", "title": "Kickoff", **fields}
    response = client.post("/api/activities", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_login_with_json_credentials(client):
    response = client.post("/api/login", json={"username": "staff", "password": "staff"})
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Login successful"}


def test_login_with_form_credentials_rejected(client):
    response = client.post("/api/login", data={"username": "staff", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid username or password"}


def test_create_with_json_returns_camel_case_activity(client):
    body = _create(client, endDate="2025-03-05", isFullDay=True, startTime="09:00")

    assert body["id"]
    assert body["startDate"] == "2025-03-10"
    assert body["endDate"] == "2025-03-10"
    assert body["isFullDay"] is True
    assert body["startTime"] == ""
    assert body["category"] == "Other"
    assert body["phase"] == "Unspecified"
    assert body["status"] == "Planned"
    assert body["attachments"] == []
    assert body["createdAt"]


def test_create_with_multipart_stores_attachments_in_order(client, settings):
    response = client.post(
        "/api/activities",
        data={"startDate": "2025-03-10", "title": "Site visit", "isFullDay": "on", "startTime": "08:00"},
        files=[
            ("attachments", ("agenda.txt", b"agenda", "text/plain")),
            ("attachments", ("map.png", b"\x89PNG", "image/png")),
        ],
    )

    assert response.status_code == 201, response.text
    body = response.json()
    attachments = body["attachments"]
    assert [item["originalName"] for item in attachments] == ["agenda.txt", "map.png"]
    assert [item["sizeBytes"] for item in attachments] == [6, 4]
    assert attachments[1]["mimeType"] == "image/png"
    assert body["isFullDay"] is True
    assert body["startTime"] == ""

    stored = settings.uploads.upload_dir / attachments[0]["storedName"]
    assert stored.read_bytes() == b"agenda"
    download = client.get(attachments[0]["url"])
    assert download.status_code == 200
    assert download.content == b"agenda"


def test_create_missing_title_is_rejected(client):
    response = client.post("/api/activities", json={"startDate": "2025-03-10"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "required" in response.json()["message"]
    assert client.get("/api/activities").json() == []


def test_create_with_non_object_json_is_rejected(client):
    response = client.post("/api/activities", content=b"[1, 2]", headers={"content-type": "application/json"})
    assert response.status_code == 400


def test_month_and_day_queries(client):
    spanning = _create(client, startDate="2025-01-30", endDate="2025-02-02", title="Retreat")
    _create(client, startDate="2025-03-01", title="March")

    february = client.get("/api/activities", params={"month": "2025-02"}).json()
    day = client.get("/api/activities/day", params={"date": "2025-02-01"}).json()
    everything = client.get("/api/activities").json()

    assert [item["id"] for item in february] == [spanning["id"]]
    assert [item["id"] for item in day] == [spanning["id"]]
    assert [item["title"] for item in everything] == ["Retreat", "March"]


def test_day_query_requires_date(client):
    response = client.get("/api/activities/day")
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "date is required"}


def test_bad_month_is_rejected(client):
    assert client.get("/api/activities", params={"month": "2025-13"}).status_code == 400


def test_delete_is_idempotent(client):
    created = _create(client)

    first = client.delete(f"/api/activities/{created['id']}")
    second = client.delete(f"/api/activities/{created['id']}")

    assert first.json() == {"success": True}
    assert second.status_code == 200
    assert second.json() == {"success": True}
    assert client.get("/api/activities").json() == []


def test_storage_errors_map_to_500(client, api_state, monkeypatch):
    monkeypatch.setattr(api_state.context, "repository", BrokenRepository())

    response = client.get("/api/activities")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "disk full"}


def test_function_registry_listing_and_invocation(client):
    listing = client.get("/api/functions").json()["functions"]
    names = {item["name"] for item in listing}
    assert {"activities_for_day", "activities_for_month", "activity_create", "activity_delete"} <= names

    created = client.post(
        "/api/functions/activity_create",
        json={"arguments": {"startDate": "2025-05-01", "title": "Via tool"}},
    )
    assert created.status_code == 200
    activity_id = created.json()["result"]["id"]

    day = client.post("/api/functions/activities_for_day", json={"arguments": {"date": "2025-05-01"}})
    assert [item["id"] for item in day.json()["result"]["activities"]] == [activity_id]


def test_unknown_function_is_404(client):
    assert client.post("/api/functions/nope", json={"arguments": {}}).status_code == 404


def test_function_validation_errors_are_400(client):
    response = client.post("/api/functions/activities_for_day", json={"arguments": {"date": "02/01/2025"}})
    assert response.status_code == 400
