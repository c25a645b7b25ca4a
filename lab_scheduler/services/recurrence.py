"""
Expansão de recorrência semanal / Weekly recurrence expansion.

Transforma um pedido "repetir semanalmente" numa série limitada de
agendamentos datados : o pai (ocorrência zero) seguido dos filhos, um a
cada 7 dias, até recurring_end_date inclusive.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from lab_scheduler.config import settings
from lab_scheduler.errors import ValidationError
from lab_scheduler.models.booking import RecurringFrequency
from lab_scheduler.schemas.booking import BookingBase, BookingDraft
from lab_scheduler.utils.dates import parse_iso_date

log = logging.getLogger(__name__)

WEEK = timedelta(days=7)


@dataclass
class Expansion:
    parent: BookingDraft
    children: list[BookingDraft] = field(default_factory=list)
    truncated: bool = False

    @property
    def total(self) -> int:
        return 1 + len(self.children)

    def linked_children(self, parent_id: int) -> list[BookingDraft]:
        """Filhos apontando para o pai persistido / Children pointing at the persisted parent."""
        return [c.model_copy(update={"recurring_parent_id": parent_id}) for c in self.children]


def expand(request: BookingBase, max_occurrences: int | None = None) -> Expansion:
    """Expandir um pedido em pai + filhos semanais / Expand a request into parent + weekly children.

    - Sem recurring_end_date : apenas o pai.
    - recurring_end_date < date : nenhum filho (não é erro).
    - Total de ocorrências (pai incluído) limitado a max_occurrences.
    """
    limit = settings.MAX_RECURRING_OCCURRENCES if max_occurrences is None else max_occurrences
    if limit < 1:
        raise ValidationError(f"Limite de ocorrências inválido: {limit}")
    start = parse_iso_date(request.date, "date")

    data = request.model_dump()
    data["recurring_parent_id"] = None
    parent = BookingDraft(**data)

    weekly = request.is_recurring and request.recurring_frequency == RecurringFrequency.WEEKLY
    if not weekly or not request.recurring_end_date:
        return Expansion(parent=parent)

    end = parse_iso_date(request.recurring_end_date, "recurring_end_date")

    expansion = Expansion(parent=parent)
    candidate = start + WEEK
    while candidate <= end:
        if expansion.total >= limit:
            expansion.truncated = True
            log.warning(
                "Recurrence from %s to %s truncated at %d occurrences",
                request.date, request.recurring_end_date, limit,
            )
            break
        expansion.children.append(parent.model_copy(update={
            "date": candidate.isoformat(),
            "is_recurring": False,
        }))
        candidate += WEEK

    return expansion
