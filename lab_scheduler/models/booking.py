"""Modelo Agendamento / Booking model."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from lab_scheduler.catalog import grade_by_id
from lab_scheduler.database import Base


class RecurringFrequency(str, enum.Enum):
    """Frequência de repetição / Recurrence frequency."""
    NONE = "none"
    WEEKLY = "weekly"


class Booking(Base):
    __tablename__ = "schedules"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    grade_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    grade_class: Mapped[str] = mapped_column(String(5), nullable=False)
    teacher_name: Mapped[str] = mapped_column(String(150), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    time_slot_id: Mapped[int] = mapped_column(Integer, nullable=False)
    equipment_id: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False)

    # Recorrência / Recurrence
    is_recurring: Mapped[bool] = mapped_column(Boolean, default=False)
    recurring_frequency: Mapped[RecurringFrequency] = mapped_column(
        Enum(RecurringFrequency), default=RecurringFrequency.NONE
    )
    recurring_end_date: Mapped[str | None] = mapped_column(String(10))  # YYYY-MM-DD
    # Sem FK : filhos sobrevivem ao pai / No FK: children outlive the parent
    recurring_parent_id: Mapped[int | None] = mapped_column(Integer, index=True)

    created_by_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), onupdate=func.now())

    @property
    def period(self) -> str | None:
        """Turno derivado da série / Shift derived from the grade."""
        grade = grade_by_id(self.grade_id)
        return grade.shift.value if grade else None

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.date} slot={self.time_slot_id} {self.grade_id}{self.grade_class}>"
