"""Domain entity for service requests moving through the repair workflow."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class ServiceRequestStatus(str, Enum):
    """Workflow states of a service request.

    The order below is the usual path, but any state may be set from any
    other; no transition rules are enforced.
    """

    NEW = "new"
    INSPECTION = "inspection"
    SERVICE = "service"
    RECEIVED = "received"
    COMPLETED = "completed"


# Fields matched by a free-text search, case-insensitively.
SEARCHABLE_FIELDS = ("customer_contact", "serial_number", "customer_name", "product_name")

# Fields that may be changed after creation.
MUTABLE_FIELDS = frozenset({
    "product_name",
    "serial_number",
    "customer_name",
    "customer_contact",
    "issue_description",
    "status",
    "attachments",
})


@dataclass
class ServiceRequest:
    """A customer's product sent in for inspection or repair."""

    product_name: str
    serial_number: str
    customer_name: str
    customer_contact: str
    issue_description: str
    status: ServiceRequestStatus = ServiceRequestStatus.NEW
    attachments: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        # Accept raw strings from storage rows; rejects anything outside the enum.
        self.status = ServiceRequestStatus(self.status)
        if self.updated_at is None:
            self.updated_at = self.created_at

    @property
    def is_active(self) -> bool:
        return self.status != ServiceRequestStatus.COMPLETED

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over the searchable fields."""
        needle = query.casefold()
        return any(needle in getattr(self, name).casefold() for name in SEARCHABLE_FIELDS)

    def apply(self, changes: dict) -> None:
        """Merge *changes* onto this request and refresh ``updated_at``.

        Unknown or immutable keys raise ``ValueError`` before anything is
        modified, so a rejected call leaves the entity untouched.
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        status = None
        if "status" in changes:
            status = ServiceRequestStatus(changes["status"])

        for name, value in changes.items():
            if name == "status":
                value = status
            elif name == "attachments":
                value = list(value)
            setattr(self, name, value)
        self.updated_at = datetime.now(timezone.utc)
