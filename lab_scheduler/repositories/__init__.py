"""Repositórios de agendamentos / Booking repositories."""

from lab_scheduler.repositories.base import BookingRepository
from lab_scheduler.repositories.memory import InMemoryBookingRepository
from lab_scheduler.repositories.sql import SqlBookingRepository

__all__ = ["BookingRepository", "InMemoryBookingRepository", "SqlBookingRepository"]
