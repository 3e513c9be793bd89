"""Pydantic DTOs for comments on a service request."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommentCreate(BaseModel):
    """Schema for adding a comment. The request id comes from the URL."""

    text: str = Field(..., min_length=1, examples=["Replaced the seal"])
    attachments: list[str] = Field(default_factory=list)


class CommentResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    service_request_id: str
    text: str
    attachments: list[str]
    created_at: datetime
