"""Shared fixtures for API tests — an in-memory app per test."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="memory",
        upload_dir=str(tmp_path / "uploads"),
        public_base_url="http://test",
        max_upload_size_mb=1,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
