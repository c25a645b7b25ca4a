"""
Exportação da agenda semanal / Weekly schedule export.
Grade horários x dias (seg-sex) de um turno, em CSV ou XLSX para impressão.
Time slots x weekdays grid for one shift, as CSV or printable XLSX.
"""

import csv
import io
from datetime import date
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from lab_scheduler import catalog
from lab_scheduler.catalog import Shift
from lab_scheduler.models.booking import Booking
from lab_scheduler.utils.dates import school_week

WEEKDAY_NAMES = ["Segunda", "Terça", "Quarta", "Quinta", "Sexta"]
SLOT_FIELD = "Horário"

_BREAK_FILL = PatternFill(start_color="EEEEEE", end_color="EEEEEE", fill_type="solid")


def _cell_text(booking: Booking) -> str:
    grade = catalog.grade_by_id(booking.grade_id)
    equipment = catalog.equipment_by_id(booking.equipment_id)
    text = f"{grade.name if grade else booking.grade_id} {booking.grade_class} - {equipment.name if equipment else booking.equipment_id}"
    text += f"\n{booking.teacher_name}: {booking.content}"
    if booking.is_completed:
        text += " ✓"
    return text


class WeeklyScheduleExport:
    """Agenda de uma semana para um turno / One week's schedule for one shift."""

    def __init__(self, day: date, shift: Shift):
        self.days = school_week(day)
        self.shift = shift

    @property
    def start(self) -> str:
        return self.days[0].isoformat()

    @property
    def end(self) -> str:
        return self.days[-1].isoformat()

    @property
    def fields(self) -> list[str]:
        return [SLOT_FIELD] + [f"{name} {d.strftime('%d/%m')}" for name, d in zip(WEEKDAY_NAMES, self.days)]

    @property
    def title(self) -> str:
        return f"Agenda da Semana: {self.days[0].strftime('%d/%m')} a {self.days[-1].strftime('%d/%m/%Y')}"

    def build_rows(self, bookings: list[Booking]) -> list[dict[str, Any]]:
        """Linhas da grade, intervalos intercalados / Grid rows with break windows interleaved."""
        day_fields = dict(zip((d.isoformat() for d in self.days), self.fields[1:]))
        slots = catalog.time_slots_for_shift(self.shift)
        slot_ids = {s.id for s in slots}

        cells: dict[tuple[int, str], list[str]] = {}
        for b in bookings:
            if b.time_slot_id in slot_ids and b.date in day_fields:
                cells.setdefault((b.time_slot_id, b.date), []).append(_cell_text(b))

        entries: list[tuple[str, dict[str, Any]]] = []
        for slot in slots:
            row: dict[str, Any] = {SLOT_FIELD: f"{slot.start} - {slot.end}"}
            for iso, field in day_fields.items():
                row[field] = "\n\n".join(cells.get((slot.id, iso), []))
            entries.append((slot.start, row))
        for window in catalog.break_windows_for_shift(self.shift):
            row = {SLOT_FIELD: f"{window.start} - {window.end}", "_break": True}
            for field in day_fields.values():
                row[field] = window.label
            entries.append((window.start, row))

        return [row for _, row in sorted(entries, key=lambda e: e[0])]

    def to_csv(self, rows: list[dict[str, Any]]) -> bytes:
        """CSV UTF-8 BOM com separador ';' / UTF-8 BOM CSV with ';' separator."""
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=self.fields, delimiter=";", extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            writer.writerow({f: row.get(f, "") for f in self.fields})
        return ("\ufeff" + output.getvalue()).encode("utf-8")

    def to_xlsx(self, rows: list[dict[str, Any]]) -> bytes:
        """Planilha pronta para impressão / Print-ready workbook."""
        wb = Workbook()
        ws = wb.active
        ws.title = self.shift.value
        ws.page_setup.orientation = "landscape"
        ws.page_setup.fitToWidth = 1

        ws.cell(row=1, column=1, value=self.title).font = Font(bold=True, size=14)

        # Cabeçalhos / Headers
        for col_idx, field in enumerate(self.fields, 1):
            cell = ws.cell(row=3, column=col_idx, value=field)
            cell.font = Font(bold=True)
            cell.alignment = Alignment(horizontal="center")
            ws.column_dimensions[cell.column_letter].width = 14 if col_idx == 1 else 30

        # Dados / Data rows
        for row_idx, row in enumerate(rows, 4):
            for col_idx, field in enumerate(self.fields, 1):
                cell = ws.cell(row=row_idx, column=col_idx, value=row.get(field) or None)
                cell.alignment = Alignment(wrap_text=True, vertical="top")
                if row.get("_break"):
                    cell.fill = _BREAK_FILL

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
