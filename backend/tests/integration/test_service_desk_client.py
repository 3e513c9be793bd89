"""Tests for the async API client, run against the in-memory app."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.client import (
    AttachmentUploadError,
    ServiceDeskAPIError,
    ServiceDeskClient,
    UploadFile,
)

PUMP = {
    "productName": "Pump-X",
    "serialNumber": "SN1",
    "customerName": "Acme",
    "customerContact": "a@x.com",
    "issueDescription": "leak",
}


@pytest_asyncio.fixture
async def desk(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield ServiceDeskClient(base_url="http://test", http_client=http_client)


@pytest.mark.asyncio
async def test_full_request_lifecycle(desk: ServiceDeskClient):
    created = await desk.create_request(PUMP)
    assert created["status"] == "new"

    await desk.update_status(created["id"], "inspection")
    await desk.append_attachments(created["id"], ["ref1"])
    updated = await desk.append_attachments(created["id"], ["ref2"])
    assert updated["attachments"] == ["ref1", "ref2"]

    await desk.add_comment(created["id"], "Looked at it")
    assert [c["text"] for c in await desk.list_comments(created["id"])] == ["Looked at it"]

    metrics = await desk.get_metrics()
    assert metrics["underInspection"] == 1

    assert [r["id"] for r in await desk.search("pump")] == [created["id"]]
    assert await desk.list_completed() == []

    await desk.delete_request(created["id"])
    assert await desk.list_requests() == []


@pytest.mark.asyncio
async def test_api_errors_carry_status_and_detail(desk: ServiceDeskClient):
    with pytest.raises(ServiceDeskAPIError) as excinfo:
        await desk.get_request("missing")
    assert excinfo.value.status_code == 404

    with pytest.raises(ServiceDeskAPIError) as excinfo:
        await desk.create_request({"productName": "only"})
    assert excinfo.value.status_code == 400
    assert isinstance(excinfo.value.detail, list)


@pytest.mark.asyncio
async def test_upload_files_returns_servable_paths(desk: ServiceDeskClient, client):
    paths = await desk.upload_files([
        UploadFile("a.png", b"aaa", "image/png"),
        UploadFile("b.txt", b"bbb", "text/plain"),
    ])

    assert len(paths) == 2
    assert all(p.startswith("/objects/uploads/") for p in paths)
    assert (await client.get(paths[0])).content == b"aaa"
    assert (await client.get(paths[1])).content == b"bbb"


@pytest.mark.asyncio
async def test_failed_upload_reports_what_already_made_it(desk: ServiceDeskClient):
    too_big = b"x" * (1024 * 1024 + 1)

    with pytest.raises(AttachmentUploadError) as excinfo:
        await desk.upload_files([
            UploadFile("ok.png", b"fine", "image/png"),
            UploadFile("huge.bin", too_big),
            UploadFile("never.png", b"skipped", "image/png"),
        ])

    error = excinfo.value
    assert error.filename == "huge.bin"
    assert "413" in error.reason
    assert len(error.uploaded) == 1
    assert error.uploaded[0].startswith("/objects/uploads/")


@pytest.mark.asyncio
async def test_create_with_files_attaches_uploads(desk: ServiceDeskClient):
    created = await desk.create_request_with_files(PUMP, [UploadFile("photo.png", b"img", "image/png")])

    assert len(created["attachments"]) == 1
    assert created["attachments"][0].startswith("/objects/uploads/")


@pytest.mark.asyncio
async def test_upload_failure_saves_nothing(desk: ServiceDeskClient):
    with pytest.raises(AttachmentUploadError):
        await desk.create_request_with_files(PUMP, [UploadFile("huge.bin", b"x" * (1024 * 1024 + 1))])

    assert await desk.list_requests() == []
