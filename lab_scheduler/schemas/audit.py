"""Schemas Histórico / Audit log schemas."""

import enum

from pydantic import BaseModel, ConfigDict


class AuditEntity(str, enum.Enum):
    BOOKING = "Booking"
    AUTH = "auth"


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    COMPLETE = "COMPLETE"
    LOGIN = "LOGIN"
    LOGIN_FAILED = "LOGIN_FAILED"


class AuditLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    entity_type: str
    entity_id: int
    action: str
    changes: str | None = None
    user: str | None = None
    timestamp: str


class AuditPage(BaseModel):
    total: int
    items: list[AuditLogRead]
