"""Schemas Agendamento / Booking schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lab_scheduler.models.booking import RecurringFrequency

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class BookingBase(BaseModel):
    grade_id: int
    grade_class: str = Field(..., min_length=1, max_length=5)
    teacher_name: str
    date: str = Field(..., pattern=ISO_DATE_PATTERN)
    time_slot_id: int
    equipment_id: int
    content: str
    notes: str | None = None
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency = RecurringFrequency.NONE
    recurring_end_date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)


class BookingCreate(BookingBase):
    pass


class BookingDraft(BookingBase):
    """Agendamento ainda não persistido / Booking not yet persisted."""
    recurring_parent_id: int | None = None


class BookingUpdate(BaseModel):
    """Campos editáveis de uma ocorrência / Editable fields of one occurrence."""
    model_config = ConfigDict(extra="forbid")
    grade_id: int | None = None
    grade_class: str | None = Field(default=None, min_length=1, max_length=5)
    teacher_name: str | None = None
    date: str | None = Field(default=None, pattern=ISO_DATE_PATTERN)
    time_slot_id: int | None = None
    equipment_id: int | None = None
    content: str | None = None
    notes: str | None = None
    is_completed: bool | None = None


class CompletionUpdate(BaseModel):
    is_completed: bool = Field(..., strict=True)


class BookingRead(BookingBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    is_completed: bool = False
    recurring_parent_id: int | None = None
    period: str | None = None
    created_by_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BookingConflict(BaseModel):
    """Conflito não bloqueante / Non-blocking conflict warning."""
    date: str
    time_slot_id: int
    equipment_id: int
    booking_id: int
    grade_id: int
    grade_class: str


class BookingCreated(BaseModel):
    schedule: BookingRead
    children: list[BookingRead] = []
    total_created: int
    message: str
    conflicts: list[BookingConflict] = []


class BookingUpdated(BaseModel):
    schedule: BookingRead
    conflicts: list[BookingConflict] = []
