"""
Rotas de autenticação / Authentication routes.
Login, refresh token, perfil do usuário.
"""

import json
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.config import settings
from lab_scheduler.database import get_db
from lab_scheduler.models.audit import AuditLog
from lab_scheduler.models.user import User
from lab_scheduler.rate_limit import limiter
from lab_scheduler.schemas.auth import LoginRequest, RefreshRequest, TokenResponse
from lab_scheduler.schemas.user import UserRead
from lab_scheduler.utils.auth import create_access_token, create_refresh_token, decode_token, verify_password
from lab_scheduler.api.deps import get_current_user

router = APIRouter()


def _client_ip(request: Request) -> str:
    """Extrair o IP do cliente / Extract client IP (supports X-Forwarded-For behind proxy)."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(request: Request, data: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login por credenciais / Login with credentials."""
    result = await db.execute(select(User).where(User.username == data.username))
    user = result.scalar_one_or_none()
    ip = _client_ip(request)
    now = datetime.now(timezone.utc).isoformat(timespec="seconds")

    if user is None or not verify_password(data.password, user.hashed_password):
        # Registrar tentativa falha / Log failed login attempt
        db.add(AuditLog(
            entity_type="auth", entity_id=0, action="LOGIN_FAILED",
            changes=json.dumps({"username": data.username, "ip": ip}),
            user=data.username, timestamp=now,
        ))
        await db.commit()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuário ou senha incorretos")

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Conta desativada")

    db.add(AuditLog(
        entity_type="auth", entity_id=user.id, action="LOGIN",
        changes=json.dumps({"ip": ip}),
        user=user.username, timestamp=now,
    ))

    return TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.post("/refresh", response_model=TokenResponse)
async def refresh(data: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Renovar os tokens / Refresh tokens."""
    payload = decode_token(data.refresh_token)
    if payload is None or payload.get("type") != "refresh":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token inválido")

    user = await db.get(User, int(payload["sub"]))
    if user is None or not user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Usuário não encontrado ou inativo")

    return TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


@router.get("/me", response_model=UserRead)
async def me(user: User = Depends(get_current_user)):
    """Perfil do usuário conectado / Current user profile."""
    return user
