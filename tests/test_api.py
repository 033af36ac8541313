"""
Tests for the API function registry and the local HTTP server.
"""

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from schedule_app.api import api_state, call_api, get_api_functions
from schedule_app.config.settings import SupabaseSettings
from schedule_app.services import ServiceContext
from schedule_app.services.http import app


@pytest.fixture
def bound_state(context):
    previous = api_state.context
    api_state.reset(context)
    yield api_state
    api_state.reset(previous)


@pytest.fixture
def client(bound_state):
    return TestClient(app)


@pytest.fixture
def signed_in_client(client):
    response = client.post("/api/session", json={"email": "alice@example.com", "password": "alice-secret"})
    assert response.status_code == 200
    return client


class TestRegistry:
    def test_functions_are_registered(self):
        names = {func.name for func in get_api_functions()}
        assert {
            "schedule_month_grid",
            "schedule_list_entries",
            "schedule_upcoming_entries",
            "schedule_entries_for_day",
            "schedule_create_entry",
            "schedule_update_entry",
            "schedule_delete_entry",
            "list_available_tools",
        } <= names

    def test_parameter_schema(self):
        described = {func.name: func.describe() for func in get_api_functions()}
        params = described["schedule_create_entry"]["parameters"]
        assert params["required"] == ["title", "date"]
        assert params["properties"]["time"] == {"type": "string", "default": ""}
        assert "required" not in described["schedule_list_entries"]["parameters"]

    def test_unknown_function(self):
        with pytest.raises(KeyError):
            call_api("does_not_exist")

    def test_month_grid(self):
        result = call_api("schedule_month_grid", month="2024-03", selected="2024-03-09")
        assert result["month"] == "2024-03"
        assert result["title"] == "March 2024"
        assert result["weekdays"][0] == "Sun"
        assert len(result["cells"]) == 42
        assert result["cells"][0]["date"] == "2024-02-25"
        assert [cell["date"] for cell in result["cells"] if cell["is_selected"]] == ["2024-03-09"]

    def test_list_available_tools(self):
        tools = call_api("list_available_tools")["tools"]
        assert [tool["name"] for tool in tools] == sorted(tool["name"] for tool in tools)


class TestHttp:
    def test_list_functions(self, client):
        response = client.get("/api/functions")
        assert response.status_code == 200
        assert any(func["name"] == "schedule_month_grid" for func in response.json()["functions"])

    def test_list_functions_by_category(self, client):
        response = client.get("/api/functions", params={"category": "calendar"})
        assert [func["name"] for func in response.json()["functions"]] == ["schedule_month_grid"]

    def test_unknown_function_is_404(self, client):
        response = client.post("/api/functions/nope", json={})
        assert response.status_code == 404

    def test_bad_credentials_are_401(self, client):
        response = client.post("/api/session", json={"email": "alice@example.com", "password": "wrong"})
        assert response.status_code == 401

    def test_writes_need_a_session(self, client):
        response = client.post(
            "/api/functions/schedule_create_entry",
            json={"arguments": {"title": "Dentist", "date": "2024-03-15"}},
        )
        assert response.status_code == 401

    def test_entry_lifecycle(self, signed_in_client, schedules_table):
        client = signed_in_client
        created = client.post(
            "/api/functions/schedule_create_entry",
            json={"arguments": {"title": "Dentist", "date": "2024-03-15"}},
        )
        assert created.status_code == 200
        entry_id = created.json()["result"]["id"]
        assert schedules_table.rows[0]["user_id"] == "user-1"

        listed = client.post("/api/functions/schedule_list_entries", json={}).json()["result"]["entries"]
        assert [(entry["id"], entry["label"], entry["time"]) for entry in listed] == [(entry_id, "Mar 15", "")]

        updated = client.post(
            "/api/functions/schedule_update_entry",
            json={"arguments": {"entry_id": entry_id, "title": "Dentist", "date": "2024-03-15", "time": "09:30"}},
        )
        assert updated.status_code == 200
        assert updated.json()["result"]["entry"]["time"] == "09:30"

        day = client.post(
            "/api/functions/schedule_entries_for_day", json={"arguments": {"day": "2024-03-15"}}
        ).json()["result"]
        assert [entry["title"] for entry in day["entries"]] == ["Dentist"]

        deleted = client.post("/api/functions/schedule_delete_entry", json={"arguments": {"entry_id": entry_id}})
        assert deleted.json()["result"] == {"deleted": entry_id}
        assert schedules_table.rows == []

    def test_invalid_entry_is_400(self, signed_in_client, schedules_table):
        response = signed_in_client.post(
            "/api/functions/schedule_create_entry",
            json={"arguments": {"title": "Dentist", "date": "2024-03-15", "time": "9am"}},
        )
        assert response.status_code == 400
        assert schedules_table.calls == []

    def test_missing_argument_is_400(self, signed_in_client):
        response = signed_in_client.post("/api/functions/schedule_entries_for_day", json={"arguments": {}})
        assert response.status_code == 400

    def test_missing_entry_is_404(self, signed_in_client):
        response = signed_in_client.post(
            "/api/functions/schedule_delete_entry", json={"arguments": {"entry_id": "missing"}}
        )
        assert response.status_code == 404

    def test_store_failure_is_502(self, signed_in_client, schedules_table):
        schedules_table.failure = "boom"
        response = signed_in_client.post("/api/functions/schedule_list_entries", json={})
        assert response.status_code == 502
        assert response.json()["detail"] == "boom"

    def test_foreign_origins_get_no_cors_grant(self, signed_in_client):
        preflight = signed_in_client.options(
            "/api/functions/schedule_list_entries",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
        )
        assert "access-control-allow-origin" not in preflight.headers

        response = signed_in_client.post(
            "/api/functions/schedule_list_entries", json={}, headers={"Origin": "https://evil.example"}
        )
        assert "access-control-allow-origin" not in response.headers
        assert "access-control-allow-credentials" not in response.headers

    def test_local_origin_is_allowed(self, client):
        preflight = client.options(
            "/api/functions",
            headers={"Origin": "http://localhost", "Access-Control-Request-Method": "GET"},
        )
        assert preflight.headers["access-control-allow-origin"] == "http://localhost"

    def test_sign_out(self, signed_in_client, bound_state):
        response = signed_in_client.delete("/api/session")
        assert response.status_code == 200
        assert response.json() == {"user": None}
        assert bound_state.auth.current_user() is None


def test_unconfigured_backend_is_503(settings):
    unconfigured = ServiceContext(settings=replace(settings, supabase=SupabaseSettings(url=None, anon_key=None)))
    previous = api_state.context
    api_state.reset(unconfigured)
    try:
        response = TestClient(app).post(
            "/api/session", json={"email": "alice@example.com", "password": "alice-secret"}
        )
    finally:
        api_state.reset(previous)
    assert response.status_code == 503
    assert "SUPABASE_URL" in response.json()["detail"]
