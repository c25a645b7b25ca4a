"""Repositório SQLAlchemy async / SQLAlchemy async booking repository."""

import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.errors import RepositoryError
from lab_scheduler.models.audit import AuditLog
from lab_scheduler.models.booking import Booking
from lab_scheduler.repositories.base import BookingRepository
from lab_scheduler.schemas.booking import BookingDraft

logger = logging.getLogger(__name__)

_ORDER = (Booking.date, Booking.time_slot_id, Booking.id)


class SqlBookingRepository(BookingRepository):
    """Agendamentos persistidos via AsyncSession / Bookings persisted through an AsyncSession.

    As escritas usam flush ; o commit acontece ao sair de transaction().
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def transaction(self):
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.exception("Booking transaction rolled back")
            raise RepositoryError("Erro ao gravar agendamentos") from exc
        except BaseException:
            await self.session.rollback()
            raise

    async def _scalars(self, query) -> list[Booking]:
        try:
            result = await self.session.execute(query)
        except SQLAlchemyError as exc:
            raise RepositoryError("Erro ao consultar agendamentos") from exc
        return list(result.scalars().all())

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            raise RepositoryError("Erro ao gravar agendamento") from exc

    async def insert(self, draft: BookingDraft, created_by_id: int | None = None) -> Booking:
        booking = Booking(**draft.model_dump(), is_completed=False, created_by_id=created_by_id)
        self.session.add(booking)
        await self._flush()
        await self.session.refresh(booking)
        return booking

    async def get_by_id(self, booking_id: int) -> Booking | None:
        try:
            return await self.session.get(Booking, booking_id)
        except SQLAlchemyError as exc:
            raise RepositoryError("Erro ao buscar agendamento") from exc

    async def update(self, booking_id: int, fields: dict[str, Any]) -> Booking | None:
        booking = await self.get_by_id(booking_id)
        if booking is None:
            return None
        for key, value in fields.items():
            setattr(booking, key, value)
        await self._flush()
        await self.session.refresh(booking)
        return booking

    async def delete(self, booking_id: int) -> bool:
        booking = await self.get_by_id(booking_id)
        if booking is None:
            return False
        await self.session.delete(booking)
        await self._flush()
        return True

    async def find_all(self) -> list[Booking]:
        return await self._scalars(select(Booking).order_by(*_ORDER))

    async def find_by_date(self, date: str) -> list[Booking]:
        return await self._scalars(select(Booking).where(Booking.date == date).order_by(*_ORDER))

    async def find_by_date_range(self, start: str, end: str) -> list[Booking]:
        return await self._scalars(
            select(Booking).where(Booking.date >= start, Booking.date <= end).order_by(*_ORDER)
        )

    async def find_by_grade(self, grade_id: int) -> list[Booking]:
        return await self._scalars(select(Booking).where(Booking.grade_id == grade_id).order_by(*_ORDER))

    async def find_upcoming(self, limit: int, today: str) -> list[Booking]:
        return await self._scalars(
            select(Booking).where(Booking.date >= today).order_by(*_ORDER).limit(limit)
        )

    async def find_children(self, parent_id: int) -> list[Booking]:
        return await self._scalars(
            select(Booking).where(Booking.recurring_parent_id == parent_id).order_by(*_ORDER)
        )

    async def find_by_slot(self, date: str, time_slot_id: int, equipment_id: int) -> list[Booking]:
        return await self._scalars(
            select(Booking).where(
                Booking.date == date,
                Booking.time_slot_id == time_slot_id,
                Booking.equipment_id == equipment_id,
            ).order_by(Booking.id)
        )

    async def log_action(self, entity_id: int, action: str, changes: dict[str, Any], user: str | None) -> None:
        self.session.add(AuditLog(
            entity_type="Booking",
            entity_id=entity_id,
            action=action,
            changes=json.dumps(changes, ensure_ascii=False, default=str),
            user=user,
            timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
        ))
        await self._flush()
