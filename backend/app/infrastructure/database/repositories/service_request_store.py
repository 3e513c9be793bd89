"""Concrete ServiceRequestStore backed by SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from app.application.interfaces import ServiceRequestStore
from app.domain.entities import Comment, ServiceRequest, ServiceRequestStatus
from app.domain.entities.service_request import SEARCHABLE_FIELDS
from app.infrastructure.database.models import CommentModel, ServiceRequestModel


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _escape_like(query: str) -> str:
    return query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyServiceRequestStore(ServiceRequestStore):
    """Implements the ServiceRequestStore port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ServiceRequestModel) -> ServiceRequest:
        """Map ORM model → domain entity."""
        return ServiceRequest(
            id=model.id,
            product_name=model.product_name,
            serial_number=model.serial_number,
            customer_name=model.customer_name,
            customer_contact=model.customer_contact,
            issue_description=model.issue_description,
            status=ServiceRequestStatus(model.status),
            attachments=list(model.attachments or []),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_model(self, entity: ServiceRequest) -> ServiceRequestModel:
        """Map domain entity → ORM model (for creation)."""
        return ServiceRequestModel(
            id=entity.id,
            product_name=entity.product_name,
            serial_number=entity.serial_number,
            customer_name=entity.customer_name,
            customer_contact=entity.customer_contact,
            issue_description=entity.issue_description,
            status=entity.status.value,
            attachments=list(entity.attachments),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _comment_to_entity(self, model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            service_request_id=model.service_request_id,
            text=model.text,
            attachments=list(model.attachments or []),
            created_at=_as_utc(model.created_at),
        )

    async def _fetch(self, stmt: Select) -> list[ServiceRequest]:
        stmt = stmt.order_by(ServiceRequestModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    # ── Service requests ────────────────────────────────────────────

    async def get(self, request_id: str) -> ServiceRequest | None:
        result = await self._session.get(ServiceRequestModel, request_id)
        return self._to_entity(result) if result else None

    async def list_all(self) -> list[ServiceRequest]:
        return await self._fetch(select(ServiceRequestModel))

    async def list_active(self) -> list[ServiceRequest]:
        return await self._fetch(
            select(ServiceRequestModel).where(
                ServiceRequestModel.status != ServiceRequestStatus.COMPLETED.value
            )
        )

    async def list_completed(self) -> list[ServiceRequest]:
        return await self._fetch(
            select(ServiceRequestModel).where(
                ServiceRequestModel.status == ServiceRequestStatus.COMPLETED.value
            )
        )

    async def search(self, query: str) -> list[ServiceRequest]:
        columns = [getattr(ServiceRequestModel, name) for name in SEARCHABLE_FIELDS]
        if self._session.bind.dialect.name == "sqlite":
            # casefold() is registered on every SQLite connection (see session.py)
            needle = query.casefold()
            conditions = [
                func.casefold(column).contains(needle, autoescape=True) for column in columns
            ]
        else:
            pattern = f"%{_escape_like(query)}%"
            conditions = [column.ilike(pattern, escape="\\") for column in columns]
        return await self._fetch(select(ServiceRequestModel).where(or_(*conditions)))

    async def create(self, request: ServiceRequest) -> ServiceRequest:
        model = self._to_model(request)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, request_id: str, changes: dict[str, Any]) -> ServiceRequest | None:
        model = await self._session.get(ServiceRequestModel, request_id)
        if model is None:
            return None

        # Validate and merge on the entity first so a bad change never reaches the row
        entity = self._to_entity(model)
        entity.apply(changes)

        model.product_name = entity.product_name
        model.serial_number = entity.serial_number
        model.customer_name = entity.customer_name
        model.customer_contact = entity.customer_contact
        model.issue_description = entity.issue_description
        model.status = entity.status.value
        model.attachments = list(entity.attachments)
        model.updated_at = entity.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, request_id: str) -> bool:
        # Comments reference the request, so they have to go first
        await self._session.execute(
            delete(CommentModel).where(CommentModel.service_request_id == request_id)
        )
        model = await self._session.get(ServiceRequestModel, request_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True

    # ── Comments ────────────────────────────────────────────────────

    async def list_comments(self, request_id: str) -> list[Comment]:
        stmt = (
            select(CommentModel)
            .where(CommentModel.service_request_id == request_id)
            .order_by(CommentModel.created_at.asc())
        )
        result = await self._session.execute(stmt)
        return [self._comment_to_entity(row) for row in result.scalars().all()]

    async def add_comment(self, comment: Comment) -> Comment:
        model = CommentModel(
            id=comment.id,
            service_request_id=comment.service_request_id,
            text=comment.text,
            attachments=list(comment.attachments),
            created_at=comment.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return self._comment_to_entity(model)
