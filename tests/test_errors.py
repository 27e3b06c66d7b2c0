"""
Tests for error shaping: field names in validation errors and the 500 handler.
"""
import uuid

import httpx
import pytest

from cardflow import main
from cardflow.auth import get_current_user


@pytest.fixture
async def failing_client(client):
    async def broken_user():
        raise RuntimeError("disk on fire")

    main.app.dependency_overrides[get_current_user] = broken_user
    transport = httpx.ASGITransport(app=main.app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    main.app.dependency_overrides.pop(get_current_user, None)


async def test_unhandled_error_shows_detail_in_development(failing_client, monkeypatch):
    monkeypatch.setattr(main, "is_production", lambda: False)
    resp = await failing_client.get("/auth/profile")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error", "error": "disk on fire"}


async def test_unhandled_error_hides_detail_in_production(failing_client, monkeypatch):
    monkeypatch.setattr(main, "is_production", lambda: True)
    resp = await failing_client.get("/auth/profile")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Server error", "error": "See server logs"}


async def test_path_parameter_errors_use_wire_names(client, alice):
    resp = await client.get("/cards/not-a-uuid", headers=alice["headers"])
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["cardId"]

    resp = await client.get("/workspaces/not-a-uuid", headers=alice["headers"])
    assert [e["field"] for e in resp.json()["errors"]] == ["workspaceId"]


async def test_malformed_json_body(client, alice):
    resp = await client.post(
        "/workspaces",
        content=b'{"name": "broken",',
        headers={**alice["headers"], "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation failed"
    assert [e["field"] for e in resp.json()["errors"]] == ["body"]


async def test_body_errors_use_wire_names(client, alice):
    resp = await client.post(
        "/cards",
        json={"workspaceId": str(uuid.uuid4()), "title": "t", "description": "d", "titleColor": "nope"},
        headers=alice["headers"],
    )
    assert resp.status_code == 400
    assert [e["field"] for e in resp.json()["errors"]] == ["titleColor"]
