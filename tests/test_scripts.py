"""Script API tests."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from noteboard.errors import NotFoundError
from noteboard.models.script import ScriptExecution, ScriptVariable
from noteboard.services import script_service

CURL_SCRIPT = {
    "name": "Call API",
    "description": "Authenticated request",
    "content": "curl -H 'Authorization: $J{TOKEN}' $J{URL}",
    "variables": [
        {"name": "URL", "placeholder": "https://...", "required": True, "type": "url"},
        {"name": "TOKEN", "placeholder": "Bearer token", "required": True, "type": "password"},
    ],
}


async def _create(client: AsyncClient, payload: dict = CURL_SCRIPT) -> dict:
    resp = await client.post("/api/scripts/", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _count(session_factory, model) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(model))).scalar_one()


# ── CRUD ─────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_scripts_empty(client: AsyncClient):
    resp = await client.get("/api/scripts/")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_and_get_script(client: AsyncClient):
    data = await _create(client)
    assert data["name"] == "Call API"
    assert [v["name"] for v in data["variables"]] == ["TOKEN", "URL"]
    assert data["variables"][0]["type"] == "password"
    assert data["variables"][0]["required"] is True

    resp = await client.get(f"/api/scripts/{data['id']}")
    assert resp.status_code == 200
    assert resp.json()["content"] == CURL_SCRIPT["content"]
    assert len(resp.json()["variables"]) == 2


@pytest.mark.asyncio
async def test_create_trims_and_drops_blank_variables(client: AsyncClient):
    data = await _create(
        client,
        {
            "name": "  Echo  ",
            "content": "  echo $J{MSG}  ",
            "variables": [
                {"name": " MSG ", "placeholder": " message ", "default_value": "  "},
                {"name": "", "placeholder": "ignored"},
                {"name": "NO_PLACEHOLDER", "placeholder": "   "},
            ],
        },
    )
    assert data["name"] == "Echo"
    assert data["content"] == "echo $J{MSG}"
    assert data["description"] is None
    [var] = data["variables"]
    assert var["name"] == "MSG"
    assert var["placeholder"] == "message"
    assert var["default_value"] is None
    assert var["required"] is False
    assert var["type"] == "text"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "content": "x"},
        {"name": "n", "content": "   "},
        {"content": "x"},
        {"name": "n", "content": "x", "variables": [{"name": "A", "placeholder": "p", "type": "json"}]},
        {
            "name": "n",
            "content": "x",
            "variables": [{"name": "A", "placeholder": "p"}, {"name": "A", "placeholder": "q"}],
        },
    ],
)
async def test_create_rejects_invalid_payload(client: AsyncClient, session_factory, payload: dict):
    resp = await client.post("/api/scripts/", json=payload)
    assert resp.status_code == 400
    assert await _count(session_factory, ScriptVariable) == 0


@pytest.mark.asyncio
async def test_get_missing_script(client: AsyncClient):
    resp = await client.get("/api/scripts/nope")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_replaces_variables(client: AsyncClient, session_factory):
    data = await _create(client)
    resp = await client.put(
        f"/api/scripts/{data['id']}",
        json={
            "name": "Renamed",
            "content": "ping $J{URL}",
            "variables": [{"name": "URL", "placeholder": "host", "required": False}],
        },
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == "Renamed"
    assert updated["created_at"] == data["created_at"]
    assert [(v["name"], v["required"]) for v in updated["variables"]] == [("URL", False)]
    assert await _count(session_factory, ScriptVariable) == 1


@pytest.mark.asyncio
async def test_update_missing_script(client: AsyncClient):
    resp = await client.put("/api/scripts/nope", json={"name": "n", "content": "c"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_cascades_variables_and_executions(client: AsyncClient, session_factory):
    data = await _create(client)
    await client.post(
        f"/api/scripts/{data['id']}/execute",
        json={"variables": {"TOKEN": "t", "URL": "u"}},
    )
    assert await _count(session_factory, ScriptExecution) == 1

    resp = await client.delete(f"/api/scripts/{data['id']}")
    assert resp.status_code == 204

    assert (await client.get(f"/api/scripts/{data['id']}")).status_code == 404
    assert await _count(session_factory, ScriptVariable) == 0
    assert await _count(session_factory, ScriptExecution) == 0


@pytest.mark.asyncio
async def test_delete_missing_script(client: AsyncClient):
    resp = await client.delete("/api/scripts/nope")
    assert resp.status_code == 404


# ── Execute ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_execute_substitutes_variables(client: AsyncClient):
    data = await _create(client)
    variables = {"TOKEN": "abc123", "URL": "https://x"}
    resp = await client.post(f"/api/scripts/{data['id']}/execute", json={"variables": variables})
    assert resp.status_code == 200
    result = resp.json()
    assert result["script_id"] == data["id"]
    assert result["processed_content"] == "curl -H 'Authorization: abc123' https://x"
    assert result["variables_used"] == variables
    assert result["executed_at"]


@pytest.mark.asyncio
async def test_execute_missing_required_variable(client: AsyncClient, session_factory):
    data = await _create(client)
    resp = await client.post(
        f"/api/scripts/{data['id']}/execute",
        json={"variables": {"TOKEN": "   "}},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["missing"] == ["TOKEN", "URL"]
    assert "TOKEN" in body["detail"]
    assert await _count(session_factory, ScriptExecution) == 0


@pytest.mark.asyncio
async def test_execute_leaves_unknown_placeholders(client: AsyncClient):
    data = await _create(client, {"name": "n", "content": "x=$J{MISSING} y=$J{Y}"})
    resp = await client.post(
        f"/api/scripts/{data['id']}/execute", json={"variables": {"Y": "1", "EXTRA": "z"}}
    )
    assert resp.status_code == 200
    assert resp.json()["processed_content"] == "x=$J{MISSING} y=1"


@pytest.mark.asyncio
async def test_execute_missing_script(client: AsyncClient):
    resp = await client.post("/api/scripts/nope/execute", json={"variables": {}})
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Script 'nope' not found"}


@pytest.mark.asyncio
async def test_execute_unknown_script_raises_not_found(db):
    with pytest.raises(NotFoundError) as exc_info:
        await script_service.execute_script(db, "nope", {})
    assert exc_info.value.kind == "Script"
    assert exc_info.value.key == "nope"


@pytest.mark.asyncio
async def test_execute_succeeds_when_history_write_fails(client: AsyncClient, session_factory):
    data = await _create(client)
    with patch(
        "noteboard.services.script_service.ScriptExecution",
        side_effect=SQLAlchemyError("disk full"),
    ):
        resp = await client.post(
            f"/api/scripts/{data['id']}/execute",
            json={"variables": {"TOKEN": "abc123", "URL": "https://x"}},
        )
    assert resp.status_code == 200
    assert resp.json()["processed_content"] == "curl -H 'Authorization: abc123' https://x"
    assert await _count(session_factory, ScriptExecution) == 0


@pytest.mark.asyncio
async def test_execution_history_newest_first(client: AsyncClient):
    data = await _create(client)
    for token in ("first", "second"):
        await client.post(
            f"/api/scripts/{data['id']}/execute",
            json={"variables": {"TOKEN": token, "URL": "https://x"}},
        )

    resp = await client.get(f"/api/scripts/{data['id']}/executions")
    assert resp.status_code == 200
    history = resp.json()
    assert [h["variables_used"]["TOKEN"] for h in history] == ["second", "first"]
    assert history[0]["processed_content"] == "curl -H 'Authorization: second' https://x"


@pytest.mark.asyncio
async def test_execution_history_missing_script(client: AsyncClient):
    resp = await client.get("/api/scripts/nope/executions")
    assert resp.status_code == 404
