"""
Modelos SQLAlchemy / SQLAlchemy models.
Importar todos os modelos aqui para registrá-los no metadata.
Import all models here so they are registered on the metadata.
"""

from lab_scheduler.models.user import User, UserRole
from lab_scheduler.models.booking import Booking, RecurringFrequency
from lab_scheduler.models.audit import AuditLog
from lab_scheduler.models.push_subscription import PushSubscription

__all__ = [
    "User",
    "UserRole",
    "Booking",
    "RecurringFrequency",
    "AuditLog",
    "PushSubscription",
]
