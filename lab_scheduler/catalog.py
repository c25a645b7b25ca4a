"""
Catálogo do domínio / Domain catalog.
Tabelas estáticas: séries, horários por turno, equipamentos e intervalos.
Static lookup tables: grades, time slots per shift, equipment, break windows.
"""

import enum
from dataclasses import dataclass


class Shift(str, enum.Enum):
    """Turno escolar / School shift."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


@dataclass(frozen=True)
class Grade:
    id: int
    name: str
    classes: tuple[str, ...]
    shift: Shift
    # Prefixo do código de turma ("3" -> "3A", "1EM-" -> "1EM-A")
    class_prefix: str

    def class_codes(self) -> list[str]:
        return [f"{self.class_prefix}{letter}" for letter in self.classes]


@dataclass(frozen=True)
class TimeSlot:
    id: int
    start: str  # HH:MM
    end: str  # HH:MM
    shift: Shift


@dataclass(frozen=True)
class Equipment:
    id: int
    name: str


@dataclass(frozen=True)
class BreakWindow:
    start: str  # HH:MM
    end: str  # HH:MM
    label: str
    grade_ids: tuple[int, ...]
    shift: Shift


GRADES: tuple[Grade, ...] = (
    # Anos Iniciais (Ensino Fundamental I) - tarde
    Grade(1, "1° Ano", ("A", "B", "C"), Shift.AFTERNOON, "1"),
    Grade(2, "2° Ano", ("A", "B", "C"), Shift.AFTERNOON, "2"),
    Grade(3, "3° Ano", ("A", "B"), Shift.AFTERNOON, "3"),
    Grade(4, "4° Ano", ("A", "B"), Shift.AFTERNOON, "4"),
    Grade(5, "5° Ano", ("A", "B"), Shift.AFTERNOON, "5"),
    # Anos Finais (Ensino Fundamental II) - manhã
    Grade(6, "6° Ano", ("A", "B"), Shift.MORNING, "6"),
    Grade(7, "7° Ano", ("A", "B"), Shift.MORNING, "7"),
    Grade(8, "8° Ano", ("A", "B", "C"), Shift.MORNING, "8"),
    Grade(9, "9° Ano", ("A", "B", "C"), Shift.MORNING, "9"),
    Grade(10, "1° EM", ("A", "B"), Shift.MORNING, "1EM-"),
    # Ensino Médio - noite
    Grade(11, "1° EM", ("C", "D"), Shift.NIGHT, "1EM-"),
    Grade(12, "2° EM", ("A", "B"), Shift.NIGHT, "2EM-"),
    Grade(13, "3° EM", ("A", "B"), Shift.NIGHT, "3EM-"),
)

TIME_SLOTS: tuple[TimeSlot, ...] = (
    # Tarde (13h às 18h20)
    TimeSlot(1, "13:00", "13:50", Shift.AFTERNOON),
    TimeSlot(2, "13:50", "14:40", Shift.AFTERNOON),
    TimeSlot(3, "15:00", "15:50", Shift.AFTERNOON),
    TimeSlot(4, "15:50", "16:40", Shift.AFTERNOON),
    TimeSlot(5, "16:40", "17:30", Shift.AFTERNOON),
    TimeSlot(6, "17:30", "18:20", Shift.AFTERNOON),
    # Manhã (7h às 12h20)
    TimeSlot(7, "07:00", "07:50", Shift.MORNING),
    TimeSlot(8, "07:50", "08:40", Shift.MORNING),
    TimeSlot(9, "08:40", "09:30", Shift.MORNING),
    TimeSlot(10, "09:50", "10:40", Shift.MORNING),
    TimeSlot(11, "10:40", "11:30", Shift.MORNING),
    TimeSlot(12, "11:30", "12:20", Shift.MORNING),
    # Noite (18h50 às 22h50)
    TimeSlot(13, "18:50", "19:35", Shift.NIGHT),
    TimeSlot(14, "19:35", "20:20", Shift.NIGHT),
    TimeSlot(15, "20:35", "21:20", Shift.NIGHT),
    TimeSlot(16, "21:20", "22:05", Shift.NIGHT),
    TimeSlot(17, "22:05", "22:50", Shift.NIGHT),
)

EQUIPMENT: tuple[Equipment, ...] = (
    Equipment(1, "Chromebooks"),
    Equipment(2, "Laboratório"),
    Equipment(3, "Tablets"),
    Equipment(4, "Projetor"),
    Equipment(5, "Notebook Positivo"),
)

BREAK_WINDOWS: tuple[BreakWindow, ...] = (
    BreakWindow("14:40", "15:00", "Intervalo 4° e 5° anos", (4, 5), Shift.AFTERNOON),
    BreakWindow("15:30", "15:50", "Intervalo 1°, 2° e 3° anos", (1, 2, 3), Shift.AFTERNOON),
    BreakWindow("09:30", "09:50", "Intervalo", (6, 7, 8, 9, 10), Shift.MORNING),
    BreakWindow("20:20", "20:35", "Intervalo", (11, 12, 13), Shift.NIGHT),
)

_GRADES_BY_ID = {g.id: g for g in GRADES}
_SLOTS_BY_ID = {s.id: s for s in TIME_SLOTS}
_EQUIPMENT_BY_ID = {e.id: e for e in EQUIPMENT}
_CLASS_CODES = {code: (g.id, letter) for g in GRADES for code, letter in zip(g.class_codes(), g.classes)}


def grade_by_id(grade_id: int) -> Grade | None:
    return _GRADES_BY_ID.get(grade_id)


def all_grades() -> list[Grade]:
    return list(GRADES)


def grades_for_shift(shift: Shift) -> list[Grade]:
    return [g for g in GRADES if g.shift == shift]


def time_slot_by_id(slot_id: int) -> TimeSlot | None:
    return _SLOTS_BY_ID.get(slot_id)


def time_slots_for_shift(shift: Shift) -> list[TimeSlot]:
    """Horários de um turno, ordenados pelo início / Shift slots ordered by start."""
    return sorted((s for s in TIME_SLOTS if s.shift == shift), key=lambda s: s.start)


def equipment_by_id(equipment_id: int) -> Equipment | None:
    return _EQUIPMENT_BY_ID.get(equipment_id)


def all_equipment() -> list[Equipment]:
    return list(EQUIPMENT)


def break_windows_for_shift(shift: Shift) -> list[BreakWindow]:
    """Intervalos de um turno (apenas exibição) / Shift break windows (display only)."""
    return [b for b in BREAK_WINDOWS if b.shift == shift]


def class_options() -> list[str]:
    """Códigos de turma válidos para professores / Valid teacher class codes."""
    return list(_CLASS_CODES)


def class_for_code(code: str) -> tuple[int, str] | None:
    """Resolver "3A" ou "1EM-A" em (grade_id, turma) / Resolve a class code."""
    return _CLASS_CODES.get(code)
