"""SQLAlchemy ORM model for comments on a service request."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class CommentModel(Base):
    """ORM model — maps to the 'comments' table."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    service_request_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("service_requests.id"), nullable=False
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    attachments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_comments_service_request", "service_request_id"),
    )

    def __repr__(self) -> str:
        return f"<CommentModel(id={self.id}, request={self.service_request_id})>"
