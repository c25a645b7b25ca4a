"""Rotas Notificações push / Push notification routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.config import settings
from lab_scheduler.database import get_db
from lab_scheduler.models.push_subscription import PushSubscription
from lab_scheduler.models.user import User
from lab_scheduler.schemas.notification import (
    SendAllRequest,
    SendTestRequest,
    SubscriptionCreate,
    SubscriptionDelete,
    SubscriptionRead,
)
from lab_scheduler.services.notification_service import Notifier
from lab_scheduler.api.deps import get_current_user, get_notifier, require_admin

router = APIRouter()


@router.get("/vapid-public-key")
async def vapid_public_key():
    """Chave pública VAPID para o navegador / VAPID public key for the browser."""
    if not settings.VAPID_PUBLIC_KEY:
        raise HTTPException(status_code=500, detail="VAPID_PUBLIC_KEY não configurada")
    return {"key": settings.VAPID_PUBLIC_KEY}


@router.post("/subscribe", response_model=SubscriptionRead, status_code=201)
async def subscribe(
    data: SubscriptionCreate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Salvar inscrição (upsert pelo endpoint) / Save subscription (upsert by endpoint)."""
    result = await db.execute(select(PushSubscription).where(PushSubscription.endpoint == data.endpoint))
    subscription = result.scalar_one_or_none()
    if subscription is None:
        subscription = PushSubscription(endpoint=data.endpoint, user_id=user.id, p256dh="", auth="")
        db.add(subscription)
    subscription.user_id = user.id
    subscription.p256dh = data.keys.p256dh
    subscription.auth = data.keys.auth
    await db.flush()
    await db.refresh(subscription)
    return subscription


@router.delete("/unsubscribe")
async def unsubscribe(
    data: SubscriptionDelete,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Cancelar inscrição / Cancel subscription."""
    result = await db.execute(delete(PushSubscription).where(PushSubscription.endpoint == data.endpoint))
    if not result.rowcount:
        raise HTTPException(status_code=404, detail="Inscrição não encontrada")
    return {"message": "Inscrição cancelada com sucesso"}


@router.post("/send-test")
async def send_test(
    data: SendTestRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    admin: User = Depends(require_admin),
):
    """Notificação de teste para um usuário / Test notification for one user."""
    count = await db.scalar(select(func.count(PushSubscription.id)).where(PushSubscription.user_id == data.user_id))
    if not count:
        raise HTTPException(status_code=404, detail="Nenhuma inscrição encontrada para este usuário")
    await notifier.notify_user(
        data.user_id,
        "Notificação de Teste",
        "Esta é uma notificação de teste do sistema de gerenciamento de laboratório",
    )
    return {"message": "Notificação de teste enviada com sucesso"}


@router.post("/send-all")
async def send_all(
    data: SendAllRequest,
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
    admin: User = Depends(require_admin),
):
    """Notificação para todos os inscritos / Notification to every subscriber."""
    count = await db.scalar(select(func.count(PushSubscription.id)))
    if not count:
        return {
            "message": "Nenhum usuário inscrito para notificações",
            "warning": True,
        }
    await notifier.notify_all(data.title, data.message)
    return {"message": "Notificações enviadas com sucesso", "subscribers": count}
