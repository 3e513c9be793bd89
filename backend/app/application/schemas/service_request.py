"""Pydantic DTOs (Data Transfer Objects) for the ServiceRequest feature.

JSON bodies use camelCase keys (``productName``); snake_case attribute
names are accepted on input as well.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.entities import ServiceRequestStatus

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServiceRequestCreate(BaseModel):
    """Schema for creating a new service request."""

    model_config = _WIRE_CONFIG

    product_name: str = Field(..., min_length=1, examples=["Pump-X"])
    serial_number: str = Field(..., min_length=1, examples=["SN1"])
    customer_name: str = Field(..., min_length=1, examples=["Acme"])
    customer_contact: str = Field(..., min_length=1, examples=["a@x.com"])
    issue_description: str = Field(..., min_length=1, examples=["leak"])
    status: ServiceRequestStatus = ServiceRequestStatus.NEW
    attachments: list[str] = Field(default_factory=list)


class ServiceRequestUpdate(BaseModel):
    """Schema for a partial update — only the supplied fields are changed."""

    model_config = _WIRE_CONFIG

    product_name: str | None = Field(None, min_length=1)
    serial_number: str | None = Field(None, min_length=1)
    customer_name: str | None = Field(None, min_length=1)
    customer_contact: str | None = Field(None, min_length=1)
    issue_description: str | None = Field(None, min_length=1)
    status: ServiceRequestStatus | None = None
    attachments: list[str] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # Omit a field to leave it unchanged; null is not a valid value for any of them
        if value is None:
            raise ValueError("Field may not be null")
        return value

    def changes(self) -> dict:
        """The fields the caller actually set."""
        return self.model_dump(exclude_unset=True)


class AttachmentsAppend(BaseModel):
    """Batch append: new references go after the existing ones, in order."""

    attachments: list[str]


class AttachmentUrlRequest(BaseModel):
    """Single append from a raw upload URL, normalized server-side."""

    model_config = ConfigDict(populate_by_name=True)

    attachment_url: str = Field(..., min_length=1, alias="attachmentURL")


class ServiceRequestResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    product_name: str
    serial_number: str
    customer_name: str
    customer_contact: str
    issue_description: str
    status: ServiceRequestStatus
    attachments: list[str]
    created_at: datetime
    updated_at: datetime


class AttachmentResultResponse(BaseModel):
    """Result of attaching a single upload to a request."""

    model_config = _WIRE_CONFIG

    object_path: str
    request: ServiceRequestResponse


class MetricsResponse(BaseModel):
    """Dashboard counters."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    total_active: int
    new_complaints: int
    under_inspection: int
    sent_to_service: int
    received: int
