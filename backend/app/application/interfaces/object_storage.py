"""Abstract interface (port) for the object store holding uploaded attachments."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class UploadTarget:
    """Where a client should send bytes, and the reference the object will get."""

    upload_url: str
    object_path: str


@dataclass(frozen=True)
class StoredObject:
    """A readable object resolved from a servable path."""

    path: str
    size: int
    mime_type: str


class ObjectStorage(ABC):
    """Port for attachment storage — implemented in the infrastructure layer."""

    @abstractmethod
    def issue_upload_target(self) -> UploadTarget:
        """Reserve a fresh, single-use upload destination."""
        ...

    @abstractmethod
    def normalize_object_path(self, raw: str) -> str:
        """Map an upload URL (or an already servable path) onto the ``/objects/`` namespace.

        Must be deterministic and idempotent.
        """
        ...

    @abstractmethod
    async def open_object(self, object_path: str) -> StoredObject:
        """Resolve a servable path. Raises ObjectNotFoundError if absent."""
        ...

    @abstractmethod
    async def store_upload(
        self, object_id: str, content: bytes, content_type: str | None = None
    ) -> str:
        """Receive the bytes for an issued target and return the servable path."""
        ...
