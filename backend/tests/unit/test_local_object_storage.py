"""Unit tests for the local attachment storage and path normalization."""

import asyncio
import uuid

import pytest

from app.domain.exceptions import (
    DuplicateEntityError,
    InvalidObjectIdError,
    ObjectNotFoundError,
)
from app.infrastructure.storage.local_object_storage import LocalObjectStorage


@pytest.fixture
def storage(tmp_path) -> LocalObjectStorage:
    return LocalObjectStorage(upload_dir=str(tmp_path / "uploads"), public_base_url="http://files.test/")


def _object_id(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def test_upload_targets_are_unique(storage: LocalObjectStorage):
    first = storage.issue_upload_target()
    second = storage.issue_upload_target()

    assert first.upload_url != second.upload_url
    assert first.upload_url.startswith("http://files.test/api/objects/upload/")
    assert first.object_path.startswith("/objects/uploads/")
    assert _object_id(first.upload_url) == _object_id(first.object_path)


def test_normalize_maps_upload_url_to_object_path(storage: LocalObjectStorage):
    target = storage.issue_upload_target()
    assert storage.normalize_object_path(target.upload_url) == target.object_path
    assert storage.normalize_object_path(target.upload_url + "?sig=abc&exp=1") == target.object_path


def test_normalize_ignores_host(storage: LocalObjectStorage):
    object_id = str(uuid.uuid4())
    raw = f"https://other-host:9000/api/objects/upload/{object_id}"
    assert storage.normalize_object_path(raw) == f"/objects/uploads/{object_id}"


@pytest.mark.parametrize(
    "raw",
    [
        "/objects/uploads/abc",
        "https://example.com/manual.pdf",
        "https://example.com/manual.pdf?x=1",
        "not a url at all",
        "",
        "/api/objects/upload/",
    ],
)
def test_normalize_leaves_foreign_or_servable_references_alone(storage, raw):
    assert storage.normalize_object_path(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "http://files.test/api/objects/upload/0b7e2c7e-4f7e-4a32-9a57-1b1f4c1f6a10?sig=1",
        "/api/objects/upload/0b7e2c7e-4f7e-4a32-9a57-1b1f4c1f6a10",
        "/objects/uploads/0b7e2c7e-4f7e-4a32-9a57-1b1f4c1f6a10",
        "https://example.com/x?y=z",
        "",
    ],
)
def test_normalize_is_idempotent(storage, raw):
    once = storage.normalize_object_path(raw)
    assert storage.normalize_object_path(once) == once


@pytest.mark.asyncio
async def test_store_then_open(storage: LocalObjectStorage):
    target = storage.issue_upload_target()
    object_path = await storage.store_upload(_object_id(target.object_path), b"\x89PNG...", "image/png")

    assert object_path == target.object_path
    stored = await storage.open_object(object_path)
    assert stored.size == len(b"\x89PNG...")
    assert stored.mime_type == "image/png"
    assert stored.path.endswith(_object_id(object_path))


@pytest.mark.asyncio
async def test_upload_target_is_single_use(storage: LocalObjectStorage):
    object_id = _object_id(storage.issue_upload_target().object_path)
    await storage.store_upload(object_id, b"one")
    with pytest.raises(DuplicateEntityError):
        await storage.store_upload(object_id, b"two", "text/plain")


@pytest.mark.asyncio
async def test_concurrent_uploads_with_different_types_store_only_one(storage: LocalObjectStorage):
    object_id = _object_id(storage.issue_upload_target().object_path)

    results = await asyncio.gather(
        storage.store_upload(object_id, b"\x89PNG", "image/png"),
        storage.store_upload(object_id, b"%PDF", "application/pdf"),
        return_exceptions=True,
    )

    assert sum(isinstance(r, DuplicateEntityError) for r in results) == 1
    stored = await storage.open_object(f"/objects/uploads/{object_id}")
    assert stored.mime_type == "image/png"
    assert stored.size == len(b"\x89PNG")


@pytest.mark.asyncio
async def test_untyped_upload_is_served_as_octet_stream(storage: LocalObjectStorage):
    object_id = _object_id(storage.issue_upload_target().object_path)
    object_path = await storage.store_upload(object_id, b"raw")

    stored = await storage.open_object(object_path)
    assert stored.mime_type == "application/octet-stream"


@pytest.mark.asyncio
async def test_store_rejects_malformed_ids(storage: LocalObjectStorage):
    with pytest.raises(InvalidObjectIdError):
        await storage.store_upload("../escape", b"data")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "object_path",
    [
        f"/objects/uploads/{uuid.uuid4()}",
        "/objects/uploads/../../etc/passwd",
        "/objects/elsewhere/file.txt",
        "/something/else",
    ],
)
async def test_open_unknown_object_raises(storage, object_path):
    with pytest.raises(ObjectNotFoundError):
        await storage.open_object(object_path)
