"""Construtores de dados de teste / Test data builders."""

from lab_scheduler.schemas.booking import BookingCreate
from lab_scheduler.services.notification_service import Notifier


class RecordingNotifier(Notifier):
    """Guarda as notificações enviadas / Keeps sent notifications."""

    def __init__(self):
        self.sent: list[tuple] = []

    async def notify_all(self, title: str, body: str) -> int:
        self.sent.append(("all", title, body))
        return 1

    async def notify_user(self, user_id: int, title: str, body: str) -> int:
        self.sent.append((user_id, title, body))
        return 1


def make_request(**overrides) -> BookingCreate:
    """3° Ano A, tarde, Chromebooks / Grade 3 class A, afternoon, Chromebooks."""
    data = {
        "grade_id": 3,
        "grade_class": "A",
        "teacher_name": "Maria Souza",
        "date": "2024-03-04",
        "time_slot_id": 1,
        "equipment_id": 1,
        "content": "Frações no Scratch",
    }
    data.update(overrides)
    return BookingCreate(**data)
