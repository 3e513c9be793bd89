"""Domain entity for comments left on a service request."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4


@dataclass
class Comment:
    """A note attached to a service request. Comments are never edited."""

    service_request_id: str
    text: str
    attachments: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
