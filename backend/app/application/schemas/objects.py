"""Pydantic DTOs for the attachment upload flow."""

from pydantic import BaseModel, ConfigDict, Field


class UploadUrlResponse(BaseModel):
    """Single-use destination for a direct upload."""

    model_config = ConfigDict(populate_by_name=True)

    upload_url: str = Field(..., alias="uploadURL")


class NormalizePathRequest(BaseModel):
    url: str = Field(..., min_length=1)


class NormalizePathResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    normalized_path: str = Field(..., alias="normalizedPath")


class StoredObjectResponse(BaseModel):
    """Returned once bytes for an upload target have been received."""

    model_config = ConfigDict(populate_by_name=True)

    object_path: str = Field(..., alias="objectPath")
    size: int
