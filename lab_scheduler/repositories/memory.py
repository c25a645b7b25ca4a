"""
Repositório em memória / In-memory booking repository.
Mesma interface do repositório SQL ; usado em testes e scripts.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from lab_scheduler.models.booking import Booking
from lab_scheduler.repositories.base import BookingRepository, sort_key
from lab_scheduler.schemas.booking import BookingDraft


def _snapshot(booking: Booking) -> dict[str, Any]:
    return {col.key: getattr(booking, col.key) for col in Booking.__table__.columns}


class InMemoryBookingRepository(BookingRepository):

    def __init__(self):
        self.rows: dict[int, Booking] = {}
        self.audit: list[dict[str, Any]] = []
        self._next_id = 1

    @asynccontextmanager
    async def transaction(self):
        # Snapshot para desfazer em caso de erro / Snapshot to undo on failure
        rows = {k: _snapshot(v) for k, v in self.rows.items()}
        audit = list(self.audit)
        next_id = self._next_id
        try:
            yield
        except BaseException:
            self.rows = {k: Booking(**values) for k, values in rows.items()}
            self.audit, self._next_id = audit, next_id
            raise

    def _sorted(self, rows) -> list[Booking]:
        return sorted(rows, key=sort_key)

    async def insert(self, draft: BookingDraft, created_by_id: int | None = None) -> Booking:
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        booking = Booking(
            id=self._next_id,
            **draft.model_dump(),
            is_completed=False,
            created_by_id=created_by_id,
            created_at=now,
            updated_at=now,
        )
        self.rows[booking.id] = booking
        self._next_id += 1
        return booking

    async def get_by_id(self, booking_id: int) -> Booking | None:
        return self.rows.get(booking_id)

    async def update(self, booking_id: int, fields: dict[str, Any]) -> Booking | None:
        booking = self.rows.get(booking_id)
        if booking is None:
            return None
        for key, value in fields.items():
            setattr(booking, key, value)
        booking.updated_at = datetime.now(timezone.utc).replace(tzinfo=None)
        return booking

    async def delete(self, booking_id: int) -> bool:
        return self.rows.pop(booking_id, None) is not None

    async def find_all(self) -> list[Booking]:
        return self._sorted(self.rows.values())

    async def find_by_date(self, date: str) -> list[Booking]:
        return self._sorted(b for b in self.rows.values() if b.date == date)

    async def find_by_date_range(self, start: str, end: str) -> list[Booking]:
        return self._sorted(b for b in self.rows.values() if start <= b.date <= end)

    async def find_by_grade(self, grade_id: int) -> list[Booking]:
        return self._sorted(b for b in self.rows.values() if b.grade_id == grade_id)

    async def find_upcoming(self, limit: int, today: str) -> list[Booking]:
        return self._sorted(b for b in self.rows.values() if b.date >= today)[:limit]

    async def find_children(self, parent_id: int) -> list[Booking]:
        return self._sorted(b for b in self.rows.values() if b.recurring_parent_id == parent_id)

    async def find_by_slot(self, date: str, time_slot_id: int, equipment_id: int) -> list[Booking]:
        return sorted(
            (b for b in self.rows.values()
             if b.date == date and b.time_slot_id == time_slot_id and b.equipment_id == equipment_id),
            key=lambda b: b.id,
        )

    async def log_action(self, entity_id: int, action: str, changes: dict[str, Any], user: str | None) -> None:
        self.audit.append({"entity_id": entity_id, "action": action, "changes": changes, "user": user})
