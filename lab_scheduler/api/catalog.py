"""Rotas Catálogo (públicas) / Catalog routes (public)."""

from fastapi import APIRouter, Query

from lab_scheduler import catalog
from lab_scheduler.catalog import Shift
from lab_scheduler.schemas.catalog import BreakWindowRead, EquipmentRead, GradeRead, TimeSlotRead

router = APIRouter()


@router.get("/grades", response_model=list[GradeRead])
async def list_grades(shift: Shift | None = Query(default=None)):
    """Séries, opcionalmente por turno / Grades, optionally by shift."""
    return catalog.grades_for_shift(shift) if shift else catalog.all_grades()


@router.get("/time-slots", response_model=list[TimeSlotRead])
async def list_time_slots(shift: Shift | None = Query(default=None)):
    """Horários por turno / Time slots per shift."""
    if shift:
        return catalog.time_slots_for_shift(shift)
    return [slot for s in Shift for slot in catalog.time_slots_for_shift(s)]


@router.get("/equipment", response_model=list[EquipmentRead])
async def list_equipment():
    return catalog.all_equipment()


@router.get("/breaks", response_model=list[BreakWindowRead])
async def list_breaks(shift: Shift | None = Query(default=None)):
    """Intervalos (apenas exibição) / Break windows (display only)."""
    shifts = [shift] if shift else list(Shift)
    return [b for s in shifts for b in catalog.break_windows_for_shift(s)]


@router.get("/classes", response_model=list[str])
async def list_class_options():
    """Códigos de turma para professores / Teacher class codes."""
    return catalog.class_options()
