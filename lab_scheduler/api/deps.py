"""
Dependências de autenticação e serviços / Authentication and service dependencies.
Injetadas nas rotas via Depends().
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.config import settings
from lab_scheduler.database import async_session, get_db
from lab_scheduler.models.user import User, UserRole
from lab_scheduler.repositories.sql import SqlBookingRepository
from lab_scheduler.services.access_policy import Principal
from lab_scheduler.services.booking_service import BookingService
from lab_scheduler.services.notification_service import BackgroundNotifier, LogNotifier, Notifier, WebPushNotifier
from lab_scheduler.utils.auth import decode_token

security = HTTPBearer()


def build_notifier() -> Notifier:
    """Web Push se as chaves VAPID existirem, senão log / Web Push when VAPID keys exist, else log only."""
    if settings.VAPID_PUBLIC_KEY and settings.VAPID_PRIVATE_KEY:
        return BackgroundNotifier(WebPushNotifier(async_session, settings.VAPID_PRIVATE_KEY, settings.VAPID_CONTACT_EMAIL))
    return LogNotifier()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extrair e validar o usuário do JWT / Extract and validate user from JWT."""
    payload = decode_token(credentials.credentials)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido ou expirado")

    user_id = int(payload["sub"])
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuário não encontrado ou inativo")

    return user


async def get_principal(user: User = Depends(get_current_user)) -> Principal:
    return Principal.from_user(user)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Apenas administradores (PROATI) / Administrators only."""
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Acesso negado")
    return user


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


async def get_booking_service(
    db: AsyncSession = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> BookingService:
    """Serviço com repositório ligado à sessão da requisição / Service bound to the request session."""
    return BookingService(SqlBookingRepository(db), notifier=notifier)
