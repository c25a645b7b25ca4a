"""
Serviço de agendamentos / Booking service.

Cada operação : validação -> verificação de acesso -> repositório.
Nada é gravado antes da verificação de acesso ; a criação de uma série
recorrente acontece numa única transação.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from pydantic import ValidationError as PydanticValidationError

from lab_scheduler import catalog
from lab_scheduler.config import settings
from lab_scheduler.errors import NotFound, PermissionDenied, ValidationError
from lab_scheduler.models.booking import Booking
from lab_scheduler.repositories.base import BookingRepository
from lab_scheduler.schemas.booking import BookingBase, BookingConflict, BookingDraft, BookingUpdate
from lab_scheduler.services.access_policy import Action, Principal, can_view, ensure_can_act
from lab_scheduler.services.notification_service import LogNotifier, Notifier
from lab_scheduler.services.recurrence import expand
from lab_scheduler.utils.dates import parse_iso_date

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 3

# Campos copiados de um agendamento existente para revalidação / Fields merged on update
_DRAFT_FIELDS = tuple(BookingDraft.model_fields)
_REQUIRED_ON_UPDATE = ("grade_id", "grade_class", "teacher_name", "date", "time_slot_id", "equipment_id", "content")


@dataclass
class CreateResult:
    parent: Booking
    children: list[Booking] = field(default_factory=list)
    conflicts: list[BookingConflict] = field(default_factory=list)
    truncated: bool = False

    @property
    def total_created(self) -> int:
        return 1 + len(self.children)


@dataclass
class UpdateResult:
    booking: Booking
    conflicts: list[BookingConflict] = field(default_factory=list)


def validate_booking(draft: BookingBase) -> None:
    """Validar referências do catálogo e textos / Validate catalog references and texts.

    O turno do horário deve coincidir com o turno da série.
    """
    grade = catalog.grade_by_id(draft.grade_id)
    if grade is None:
        raise ValidationError(f"Série inválida: {draft.grade_id}")
    if draft.grade_class not in grade.classes:
        raise ValidationError(f"Turma '{draft.grade_class}' não existe no {grade.name}")

    if len((draft.teacher_name or "").strip()) < MIN_TEXT_LENGTH:
        raise ValidationError("O nome do professor é obrigatório")
    if len((draft.content or "").strip()) < MIN_TEXT_LENGTH:
        raise ValidationError("O conteúdo é obrigatório")

    parse_iso_date(draft.date, "date")
    if draft.recurring_end_date is not None:
        parse_iso_date(draft.recurring_end_date, "recurring_end_date")

    slot = catalog.time_slot_by_id(draft.time_slot_id)
    if slot is None:
        raise ValidationError(f"Horário inválido: {draft.time_slot_id}")
    if slot.shift != grade.shift:
        raise ValidationError(
            f"O horário {slot.start}-{slot.end} não pertence ao turno do {grade.name} ({grade.shift.value})"
        )

    if catalog.equipment_by_id(draft.equipment_id) is None:
        raise ValidationError(f"Equipamento inválido: {draft.equipment_id}")


def _first_error(exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    location = ".".join(str(p) for p in first.get("loc", ()))
    return ValidationError(f"{location}: {first.get('msg')}")


def _to_draft(data: dict[str, Any]) -> BookingDraft:
    try:
        return BookingDraft(**data)
    except PydanticValidationError as exc:
        raise _first_error(exc) from None


def _to_updates(changes: BookingUpdate | dict) -> dict[str, Any]:
    """Apenas os campos editáveis ; recorrência e id são recusados / Editable fields only."""
    if not isinstance(changes, BookingUpdate):
        try:
            changes = BookingUpdate(**changes)
        except PydanticValidationError as exc:
            raise _first_error(exc) from None
    return changes.model_dump(exclude_unset=True)


def _describe(draft: BookingBase) -> str:
    grade = catalog.grade_by_id(draft.grade_id)
    slot = catalog.time_slot_by_id(draft.time_slot_id)
    equipment = catalog.equipment_by_id(draft.equipment_id)
    day = date.fromisoformat(draft.date).strftime("%d/%m/%Y")
    return f"{grade.name} {draft.grade_class} - {equipment.name} em {day} ({slot.start})"


class BookingService:
    """Operações externas sobre agendamentos / Externally visible booking operations."""

    def __init__(
        self,
        repo: BookingRepository,
        notifier: Notifier | None = None,
        max_occurrences: int | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.repo = repo
        self.notifier = notifier or LogNotifier()
        self.max_occurrences = settings.MAX_RECURRING_OCCURRENCES if max_occurrences is None else max_occurrences
        if self.max_occurrences < 1:
            raise ValueError(f"max_occurrences must be positive, got {self.max_occurrences}")
        self.today = today

    # ------------------------------------------------------------------
    # Escrita / Writes
    # ------------------------------------------------------------------

    async def create_booking(self, principal: Principal, request: BookingBase) -> CreateResult:
        """Criar um agendamento, expandindo a recorrência semanal / Create a booking, expanding weekly recurrence."""
        draft = _to_draft(request.model_dump(exclude={"recurring_parent_id"}))
        validate_booking(draft)
        ensure_can_act(principal, Action.CREATE, draft)

        expansion = expand(draft, self.max_occurrences)
        conflicts: list[BookingConflict] = []
        for occurrence in [expansion.parent, *expansion.children]:
            conflicts.extend(await self._conflicts_for(occurrence))

        async with self.repo.transaction():
            parent = await self.repo.insert(expansion.parent, created_by_id=principal.id)
            children = []
            for child in expansion.linked_children(parent.id):
                children.append(await self.repo.insert(child, created_by_id=principal.id))
            await self.repo.log_action(parent.id, "CREATE", {
                "date": parent.date,
                "recurring_end_date": parent.recurring_end_date,
                "children": [c.id for c in children],
            }, principal.name)

        logger.info(
            "Booking %s created by user %s (%d occurrence(s), %d conflict(s))",
            parent.id, principal.id, 1 + len(children), len(conflicts),
        )
        result = CreateResult(parent=parent, children=children, conflicts=conflicts, truncated=expansion.truncated)

        body = _describe(draft)
        if children:
            body += f" - repetido por {result.total_created} semanas"
        await self._notify("Novo agendamento", body)
        return result

    async def update_booking(self, principal: Principal, booking_id: int, changes: BookingUpdate | dict) -> UpdateResult:
        """Atualizar um único agendamento / Update a single booking.

        Não reexpande a série nem toca em irmãos / Never re-expands the series or touches siblings.
        """
        existing = await self._get_or_404(booking_id)
        ensure_can_act(principal, Action.EDIT, existing)

        updates = _to_updates(changes)
        for key in _REQUIRED_ON_UPDATE:
            if key in updates and updates[key] is None:
                raise ValidationError(f"{key}: campo obrigatório")

        merged = {name: getattr(existing, name) for name in _DRAFT_FIELDS}
        merged.update({k: v for k, v in updates.items() if k in _DRAFT_FIELDS})
        draft = _to_draft(merged)
        validate_booking(draft)
        # Professor não pode mover o agendamento para outra turma / Teacher cannot move it to another class
        ensure_can_act(principal, Action.EDIT, draft)

        conflicts = await self._conflicts_for(draft, exclude_id=booking_id)

        async with self.repo.transaction():
            booking = await self.repo.update(booking_id, updates)
            if booking is None:
                raise NotFound("Agendamento não encontrado")
            await self.repo.log_action(booking_id, "UPDATE", updates, principal.name)

        logger.info("Booking %s updated by user %s", booking_id, principal.id)
        await self._notify("Agendamento alterado", _describe(draft))
        return UpdateResult(booking=booking, conflicts=conflicts)

    async def delete_booking(self, principal: Principal, booking_id: int) -> None:
        """Excluir uma única ocorrência / Delete a single occurrence.

        Filhos de um pai excluído permanecem intactos ; recurring_parent_id
        continua identificando a série.
        """
        existing = await self._get_or_404(booking_id)
        ensure_can_act(principal, Action.DELETE, existing)
        description = _describe(existing)

        async with self.repo.transaction():
            if not await self.repo.delete(booking_id):
                raise NotFound("Agendamento não encontrado")
            await self.repo.log_action(booking_id, "DELETE", {"date": existing.date}, principal.name)

        logger.info("Booking %s deleted by user %s", booking_id, principal.id)
        await self._notify("Agendamento cancelado", description)

    async def set_completion(self, principal: Principal, booking_id: int, is_completed: bool) -> Booking:
        """Marcar como concluído ou não (idempotente) / Mark as completed or not (idempotent)."""
        existing = await self._get_or_404(booking_id)
        ensure_can_act(principal, Action.COMPLETE, existing)

        async with self.repo.transaction():
            booking = await self.repo.update(booking_id, {"is_completed": is_completed})
            if booking is None:
                raise NotFound("Agendamento não encontrado")
            await self.repo.log_action(booking_id, "COMPLETE", {"is_completed": is_completed}, principal.name)
        return booking

    # ------------------------------------------------------------------
    # Leitura / Reads
    # ------------------------------------------------------------------

    async def get_booking(self, principal: Principal, booking_id: int) -> Booking:
        self._ensure_view(principal)
        return await self._get_or_404(booking_id)

    async def list_all(self, principal: Principal) -> list[Booking]:
        self._ensure_view(principal)
        return await self.repo.find_all()

    async def list_by_date(self, principal: Principal, day: str) -> list[Booking]:
        self._ensure_view(principal)
        parse_iso_date(day, "date")
        return await self.repo.find_by_date(day)

    async def list_by_date_range(self, principal: Principal, start: str, end: str) -> list[Booking]:
        self._ensure_view(principal)
        parse_iso_date(start, "start_date")
        parse_iso_date(end, "end_date")
        return await self.repo.find_by_date_range(start, end)

    async def list_by_grade(self, principal: Principal, grade_id: int) -> list[Booking]:
        self._ensure_view(principal)
        if catalog.grade_by_id(grade_id) is None:
            raise ValidationError(f"Série inválida: {grade_id}")
        return await self.repo.find_by_grade(grade_id)

    async def list_upcoming(self, principal: Principal, limit: int | None = None) -> list[Booking]:
        """Próximos agendamentos (date >= hoje) / Upcoming bookings (date >= today)."""
        self._ensure_view(principal)
        limit = settings.UPCOMING_DEFAULT_LIMIT if limit is None else limit
        if limit < 1:
            raise ValidationError("limit deve ser positivo")
        return await self.repo.find_upcoming(limit, self.today().isoformat())

    async def list_series(self, principal: Principal, parent_id: int) -> list[Booking]:
        """Pai (se ainda existir) + filhos, por data / Parent (if still present) + children, by date."""
        self._ensure_view(principal)
        parent = await self.repo.get_by_id(parent_id)
        children = await self.repo.find_children(parent_id)
        if parent is None and not children:
            raise NotFound("Série não encontrada")
        return ([parent] if parent else []) + children

    async def find_conflicts(self, principal: Principal, draft: BookingBase, exclude_id: int | None = None) -> list[BookingConflict]:
        self._ensure_view(principal)
        return await self._conflicts_for(draft, exclude_id=exclude_id)

    # ------------------------------------------------------------------

    async def _get_or_404(self, booking_id: int) -> Booking:
        booking = await self.repo.get_by_id(booking_id)
        if booking is None:
            raise NotFound("Agendamento não encontrado")
        return booking

    def _ensure_view(self, principal: Principal) -> None:
        if not can_view(principal):
            raise PermissionDenied("Acesso negado")

    async def _conflicts_for(self, draft: BookingBase, exclude_id: int | None = None) -> list[BookingConflict]:
        """Mesmo equipamento, data e horário / Same equipment, date and slot."""
        existing = await self.repo.find_by_slot(draft.date, draft.time_slot_id, draft.equipment_id)
        return [
            BookingConflict(
                date=b.date,
                time_slot_id=b.time_slot_id,
                equipment_id=b.equipment_id,
                booking_id=b.id,
                grade_id=b.grade_id,
                grade_class=b.grade_class,
            )
            for b in existing
            if b.id != exclude_id
        ]

    async def _notify(self, title: str, body: str) -> None:
        try:
            await self.notifier.notify_all(title, body)
        except Exception:
            logger.exception("Notification '%s' failed", title)
