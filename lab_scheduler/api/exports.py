"""Rotas Exportação da agenda semanal / Weekly schedule export routes."""

import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from lab_scheduler.catalog import Shift
from lab_scheduler.services.access_policy import Principal
from lab_scheduler.services.booking_service import BookingService
from lab_scheduler.services.export_service import WeeklyScheduleExport
from lab_scheduler.utils.dates import parse_iso_date
from lab_scheduler.api.deps import get_booking_service, get_principal

router = APIRouter()

_MEDIA_TYPES = {
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@router.get("/weekly")
async def export_weekly_schedule(
    date: str = Query(..., description="Qualquer dia da semana / Any day of the week (YYYY-MM-DD)"),
    shift: Shift = Query(Shift.AFTERNOON),
    format: str = Query("xlsx", pattern="^(csv|xlsx)$"),
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Agenda semanal imprimível / Printable weekly schedule."""
    export = WeeklyScheduleExport(parse_iso_date(date), shift)
    bookings = await service.list_by_date_range(principal, export.start, export.end)
    rows = export.build_rows(bookings)

    content = export.to_csv(rows) if format == "csv" else export.to_xlsx(rows)
    filename = f"agenda_{shift.value}_{export.start}.{format}"
    return StreamingResponse(
        io.BytesIO(content),
        media_type=_MEDIA_TYPES[format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
