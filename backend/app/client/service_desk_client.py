"""Async HTTP client for the service request API.

Wraps every API operation and drives the three-step attachment upload:

    1. ask the API for an upload URL
    2. PUT the bytes to that URL
    3. have the API normalize the URL (minus its query string) into an object path

Files are uploaded one after another. Nothing is retried; a failure stops
the batch and the references collected so far travel on the raised
AttachmentUploadError.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.client.errors import AttachmentUploadError, ServiceDeskAPIError

logger = logging.getLogger(__name__)


@dataclass
class UploadFile:
    """A file queued for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class ServiceDeskClient:
    """Client adapter for the service request API.

    Pass an existing ``httpx.AsyncClient`` to share connection pooling (or
    an ASGI transport in tests); otherwise one is created per call.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.request(method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, **kwargs)

    async def _api(self, method: str, path: str, **kwargs: Any) -> Any:
        """Call an API route and decode the JSON body; non-2xx raises ServiceDeskAPIError."""
        try:
            response = await self._send(method, f"{self._base_url}/api{path}", **kwargs)
        except httpx.HTTPError as exc:
            raise ServiceDeskAPIError(0, f"{type(exc).__name__}: {exc}") from exc

        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise ServiceDeskAPIError(response.status_code, detail)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ── Service requests ────────────────────────────────────────────

    async def list_requests(self) -> list[dict]:
        return await self._api("GET", "/service-requests")

    async def list_active(self) -> list[dict]:
        return await self._api("GET", "/service-requests/active")

    async def list_completed(self) -> list[dict]:
        return await self._api("GET", "/service-requests/completed")

    async def search(self, query: str) -> list[dict]:
        return await self._api("GET", "/service-requests/search", params={"q": query})

    async def get_request(self, request_id: str) -> dict:
        return await self._api("GET", f"/service-requests/{request_id}")

    async def create_request(self, fields: dict) -> dict:
        return await self._api("POST", "/service-requests", json=fields)

    async def update_request(self, request_id: str, changes: dict) -> dict:
        return await self._api("PATCH", f"/service-requests/{request_id}", json=changes)

    async def update_status(self, request_id: str, status: str) -> dict:
        return await self.update_request(request_id, {"status": status})

    async def delete_request(self, request_id: str) -> None:
        await self._api("DELETE", f"/service-requests/{request_id}")

    async def append_attachments(self, request_id: str, attachments: list[str]) -> dict:
        return await self._api(
            "POST",
            f"/service-requests/{request_id}/attachments",
            json={"attachments": attachments},
        )

    async def list_comments(self, request_id: str) -> list[dict]:
        return await self._api("GET", f"/service-requests/{request_id}/comments")

    async def add_comment(
        self, request_id: str, text: str, attachments: list[str] | None = None
    ) -> dict:
        return await self._api(
            "POST",
            f"/service-requests/{request_id}/comments",
            json={"text": text, "attachments": attachments or []},
        )

    async def get_metrics(self) -> dict:
        return await self._api("GET", "/metrics")

    # ── Attachments ─────────────────────────────────────────────────

    async def upload_file(self, file: UploadFile) -> str:
        """Run the three-step upload for one file and return its object path."""
        logger.debug("Uploading %s (%d bytes)", file.filename, len(file.content))

        target = await self._api("POST", "/objects/upload")
        upload_url: str = target["uploadURL"]

        try:
            response = await self._send(
                "PUT",
                upload_url,
                content=file.content,
                headers={"Content-Type": file.content_type},
            )
        except httpx.HTTPError as exc:
            raise AttachmentUploadError(file.filename, f"{type(exc).__name__}: {exc}") from exc
        if response.is_error:
            raise AttachmentUploadError(
                file.filename, f"{response.status_code} - {response.text}"
            )

        object_url = upload_url.split("?", 1)[0]
        normalized = await self._api("POST", "/normalize-path", json={"url": object_url})
        return normalized["normalizedPath"]

    async def upload_files(self, files: list[UploadFile]) -> list[str]:
        """Upload files sequentially; stop at the first failure."""
        uploaded: list[str] = []
        for file in files:
            try:
                uploaded.append(await self.upload_file(file))
            except AttachmentUploadError as exc:
                raise AttachmentUploadError(exc.filename, exc.reason, uploaded) from exc
            except ServiceDeskAPIError as exc:
                raise AttachmentUploadError(file.filename, str(exc), uploaded) from exc
        logger.info("Uploaded %d file(s)", len(uploaded))
        return uploaded

    async def create_request_with_files(
        self, fields: dict, files: list[UploadFile]
    ) -> dict:
        """Upload attachments first, then create the request referencing them.

        Upload problems raise AttachmentUploadError and nothing is saved;
        a rejected save raises ServiceDeskAPIError.
        """
        attachments = await self.upload_files(files) if files else []
        return await self.create_request({**fields, "attachments": attachments})
