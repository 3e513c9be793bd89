"""API tests against the SQLAlchemy store (SQLite file database)."""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.infrastructure.database import Base
from app.main import create_app

PUMP = {
    "productName": "Pump-X",
    "serialNumber": "SN1",
    "customerName": "Acme",
    "customerContact": "a@x.com",
    "issueDescription": "leak",
}


@pytest_asyncio.fixture
async def db_client(tmp_path):
    settings = Settings(
        storage_backend="database",
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://test",
        _env_file=None,
    )
    app = create_app(settings)
    # ASGITransport does not run the lifespan, so create the schema here
    async with app.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.engine.dispose()


@pytest.mark.asyncio
async def test_records_persist_across_requests(db_client):
    created = (await db_client.post("/api/service-requests", json=PUMP)).json()
    assert created["status"] == "new"
    assert created["attachments"] == []

    fetched = await db_client.get(f"/api/service-requests/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["customerName"] == "Acme"


@pytest.mark.asyncio
async def test_worked_example(db_client):
    created = (await db_client.post("/api/service-requests", json=PUMP)).json()
    request_id = created["id"]

    patched = await db_client.patch(f"/api/service-requests/{request_id}", json={"status": "inspection"})
    assert patched.json()["status"] == "inspection"

    active = [r["id"] for r in (await db_client.get("/api/service-requests/active")).json()]
    completed = [r["id"] for r in (await db_client.get("/api/service-requests/completed")).json()]
    assert request_id in active
    assert request_id not in completed

    url = f"/api/service-requests/{request_id}/attachments"
    await db_client.post(url, json={"attachments": ["ref1"]})
    final = await db_client.post(url, json={"attachments": ["ref2"]})
    assert final.json()["attachments"] == ["ref1", "ref2"]


@pytest.mark.asyncio
async def test_orderings_and_cascading_delete(db_client):
    ids = []
    for name in ["first", "second", "third"]:
        response = await db_client.post("/api/service-requests", json={**PUMP, "productName": name})
        ids.append(response.json()["id"])
        await asyncio.sleep(0.005)

    listed = [r["id"] for r in (await db_client.get("/api/service-requests")).json()]
    assert listed == list(reversed(ids))

    comments_url = f"/api/service-requests/{ids[0]}/comments"
    for text in ["one", "two", "three"]:
        await db_client.post(comments_url, json={"text": text})
        await asyncio.sleep(0.005)
    assert [c["text"] for c in (await db_client.get(comments_url)).json()] == ["one", "two", "three"]

    assert (await db_client.delete(f"/api/service-requests/{ids[0]}")).status_code == 204
    assert (await db_client.get(comments_url)).json() == []


@pytest.mark.asyncio
async def test_search_and_metrics(db_client):
    await db_client.post("/api/service-requests", json=PUMP)
    await db_client.post("/api/service-requests", json={**PUMP, "customerName": "Globex",
                                                        "customerContact": "g@globex.io",
                                                        "status": "completed"})

    found = (await db_client.get("/api/service-requests/search", params={"q": "GLOBEX"})).json()
    assert [r["customerName"] for r in found] == ["Globex"]

    metrics = (await db_client.get("/api/metrics")).json()
    assert metrics == {
        "totalActive": 1,
        "newComplaints": 1,
        "underInspection": 0,
        "sentToService": 0,
        "received": 0,
    }
