"""Utilitários de datas / Date utilities."""

import re
from datetime import date, timedelta

from lab_scheduler.errors import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str, field: str = "date") -> date:
    """Converter YYYY-MM-DD em date / Parse an ISO calendar date.

    Levanta ValidationError para formato ou data inválidos (ex: 2024-02-30).
    """
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValidationError(f"Formato de data inválido em '{field}': {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f"Data inexistente em '{field}': {value}") from None


def week_bounds(day: date) -> tuple[date, date]:
    """Segunda e sexta da semana de `day` / Monday and Friday of the week containing `day`."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=4)


def school_week(day: date) -> list[date]:
    """Dias letivos (seg-sex) / School days (Mon-Fri)."""
    monday, _ = week_bounds(day)
    return [monday + timedelta(days=i) for i in range(5)]
