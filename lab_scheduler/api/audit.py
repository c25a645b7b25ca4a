"""Rotas Histórico / Audit log routes.

Alterações de agendamentos e tentativas de login, mais recentes primeiro.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.database import get_db
from lab_scheduler.models.audit import AuditLog
from lab_scheduler.models.user import User
from lab_scheduler.schemas.audit import AuditAction, AuditEntity, AuditLogRead, AuditPage
from lab_scheduler.api.deps import require_admin

router = APIRouter()


@router.get("/", response_model=AuditPage)
async def list_audit_logs(
    entity_type: AuditEntity = Query(default=AuditEntity.BOOKING),
    booking_id: int | None = Query(default=None, ge=1),
    action: AuditAction | None = Query(default=None),
    user: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Histórico de um tipo de entidade (admin) / Audit trail for one entity type (admin only)."""
    conditions = [AuditLog.entity_type == entity_type.value]
    if booking_id is not None:
        conditions.append(AuditLog.entity_id == booking_id)
    if action is not None:
        conditions.append(AuditLog.action == action.value)
    if user:
        conditions.append(AuditLog.user == user)

    total = await db.scalar(select(func.count(AuditLog.id)).where(*conditions)) or 0
    result = await db.execute(
        select(AuditLog).where(*conditions).order_by(AuditLog.id.desc()).offset(offset).limit(limit)
    )
    return AuditPage(total=total, items=[AuditLogRead.model_validate(log) for log in result.scalars()])
