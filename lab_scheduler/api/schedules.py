"""Rotas Agendamentos / Schedule API routes."""

from fastapi import APIRouter, Depends, Query

from lab_scheduler.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingRead,
    BookingUpdate,
    BookingUpdated,
    CompletionUpdate,
)
from lab_scheduler.services.access_policy import Principal
from lab_scheduler.services.booking_service import BookingService
from lab_scheduler.api.deps import get_booking_service, get_principal

router = APIRouter()


@router.get("/", response_model=list[BookingRead])
async def list_schedules(
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Listar todos os agendamentos / List all bookings."""
    return await service.list_all(principal)


@router.get("/date/{day}", response_model=list[BookingRead])
async def list_schedules_by_date(
    day: str,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Agendamentos de um dia / Bookings for one day."""
    return await service.list_by_date(principal, day)


@router.get("/range", response_model=list[BookingRead])
async def list_schedules_by_range(
    start_date: str = Query(...),
    end_date: str = Query(...),
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Agendamentos num intervalo de datas / Bookings within a date range."""
    return await service.list_by_date_range(principal, start_date, end_date)


@router.get("/grade/{grade_id}", response_model=list[BookingRead])
async def list_schedules_by_grade(
    grade_id: int,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Agendamentos de uma série / Bookings for a grade."""
    return await service.list_by_grade(principal, grade_id)


@router.get("/upcoming", response_model=list[BookingRead])
async def list_upcoming_schedules(
    limit: int | None = Query(default=None, ge=1, le=100),
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Próximas aulas / Upcoming bookings."""
    return await service.list_upcoming(principal, limit)


@router.get("/{booking_id}/series", response_model=list[BookingRead])
async def get_schedule_series(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Série recorrente a partir do id do pai / Recurring series by parent id."""
    return await service.list_series(principal, booking_id)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_schedule(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Obter um agendamento / Get a booking."""
    return await service.get_booking(principal, booking_id)


@router.post("/", response_model=BookingCreated, status_code=201)
async def create_schedule(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Criar um agendamento (semanal opcional) / Create a booking (optionally weekly)."""
    result = await service.create_booking(principal, data)
    if result.children:
        message = f"Agendamento criado com sucesso e repetido por {result.total_created} semanas."
    else:
        message = "Agendamento criado com sucesso."
    if result.truncated:
        message += f" Limite de {service.max_occurrences} ocorrências atingido."
    return BookingCreated(
        schedule=BookingRead.model_validate(result.parent),
        children=[BookingRead.model_validate(c) for c in result.children],
        total_created=result.total_created,
        message=message,
        conflicts=result.conflicts,
    )


@router.put("/{booking_id}", response_model=BookingUpdated)
async def update_schedule(
    booking_id: int,
    data: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Modificar um agendamento / Update a booking."""
    result = await service.update_booking(principal, booking_id, data)
    return BookingUpdated(schedule=BookingRead.model_validate(result.booking), conflicts=result.conflicts)


@router.delete("/{booking_id}")
async def delete_schedule(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Excluir um agendamento / Delete a booking."""
    await service.delete_booking(principal, booking_id)
    return {"message": "Agendamento excluído com sucesso"}


@router.patch("/{booking_id}/complete", response_model=BookingRead)
async def complete_schedule(
    booking_id: int,
    data: CompletionUpdate,
    service: BookingService = Depends(get_booking_service),
    principal: Principal = Depends(get_principal),
):
    """Marcar como concluído / Mark as completed."""
    return await service.set_completion(principal, booking_id, data.is_completed)
