"""Errors raised by the service desk API client."""


class ServiceDeskAPIError(Exception):
    """The API answered with a non-2xx status — the save or read failed."""

    def __init__(self, status_code: int, detail: object):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error {status_code}: {detail}")


class AttachmentUploadError(Exception):
    """A file could not be uploaded to object storage.

    Kept distinct from ServiceDeskAPIError so callers can tell "upload
    failed" from "save failed". ``uploaded`` holds the references of the
    files that did make it before the failure.
    """

    def __init__(self, filename: str, reason: str, uploaded: list[str] | None = None):
        self.filename = filename
        self.reason = reason
        self.uploaded = list(uploaded or [])
        super().__init__(f"Upload failed for '{filename}': {reason}")
