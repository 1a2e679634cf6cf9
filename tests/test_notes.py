"""Note API tests."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_notes_empty(client: AsyncClient):
    resp = await client.get("/api/notes/")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_create_and_get_note(client: AsyncClient):
    resp = await client.post("/api/notes/", json={"title": "Groceries", "content": "milk, eggs"})
    assert resp.status_code == 201
    note = resp.json()
    assert note["title"] == "Groceries"
    assert note["created_at"] == note["updated_at"]

    resp = await client.get(f"/api/notes/{note['id']}")
    assert resp.status_code == 200
    assert resp.json()["content"] == "milk, eggs"


@pytest.mark.asyncio
async def test_update_note(client: AsyncClient):
    note = (await client.post("/api/notes/", json={"title": "Before", "content": "body"})).json()
    resp = await client.put(f"/api/notes/{note['id']}", json={"title": "After"})
    assert resp.status_code == 200
    assert resp.json()["title"] == "After"
    assert resp.json()["content"] == "body"
    assert resp.json()["updated_at"] >= note["updated_at"]


@pytest.mark.asyncio
async def test_notes_most_recently_updated_first(client: AsyncClient):
    first = (await client.post("/api/notes/", json={"title": "one"})).json()
    await client.post("/api/notes/", json={"title": "two"})
    await client.put(f"/api/notes/{first['id']}", json={"content": "touched"})

    titles = [n["title"] for n in (await client.get("/api/notes/")).json()]
    assert titles == ["one", "two"]


@pytest.mark.asyncio
async def test_delete_note(client: AsyncClient):
    note = (await client.post("/api/notes/", json={"title": "Delete me"})).json()
    resp = await client.delete(f"/api/notes/{note['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/api/notes/{note['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_missing_note(client: AsyncClient):
    assert (await client.put("/api/notes/nope", json={"title": "x"})).status_code == 404
    assert (await client.delete("/api/notes/nope")).status_code == 404
