"""
Interface do repositório de agendamentos / Booking repository interface.
Injetada no BookingService ; implementações SQL e em memória.
"""

import abc
from contextlib import AbstractAsyncContextManager
from typing import Any

from lab_scheduler.models.booking import Booking
from lab_scheduler.schemas.booking import BookingDraft


class BookingRepository(abc.ABC):

    @abc.abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Unidade atômica : tudo ou nada / Atomic unit: all or nothing."""

    @abc.abstractmethod
    async def insert(self, draft: BookingDraft, created_by_id: int | None = None) -> Booking:
        """Persistir e atribuir o id / Persist and assign the id."""

    @abc.abstractmethod
    async def get_by_id(self, booking_id: int) -> Booking | None: ...

    @abc.abstractmethod
    async def update(self, booking_id: int, fields: dict[str, Any]) -> Booking | None: ...

    @abc.abstractmethod
    async def delete(self, booking_id: int) -> bool: ...

    @abc.abstractmethod
    async def find_all(self) -> list[Booking]: ...

    @abc.abstractmethod
    async def find_by_date(self, date: str) -> list[Booking]: ...

    @abc.abstractmethod
    async def find_by_date_range(self, start: str, end: str) -> list[Booking]: ...

    @abc.abstractmethod
    async def find_by_grade(self, grade_id: int) -> list[Booking]: ...

    @abc.abstractmethod
    async def find_upcoming(self, limit: int, today: str) -> list[Booking]:
        """date >= today, ordenado por (date, time_slot_id) / ordered by (date, time_slot_id)."""

    @abc.abstractmethod
    async def find_children(self, parent_id: int) -> list[Booking]: ...

    @abc.abstractmethod
    async def find_by_slot(self, date: str, time_slot_id: int, equipment_id: int) -> list[Booking]: ...

    @abc.abstractmethod
    async def log_action(self, entity_id: int, action: str, changes: dict[str, Any], user: str | None) -> None:
        """Registrar no histórico / Write an audit entry."""


def sort_key(booking: Booking) -> tuple[str, int, int]:
    return booking.date, booking.time_slot_id, booking.id
