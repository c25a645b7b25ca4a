"""
Seed de usuários padrão / Default user seeding.
Cria o administrador (PROATI) no primeiro startup se nenhum usuário existir.
Creates the administrator account on first startup if no users exist.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.models.user import User, UserRole
from lab_scheduler.utils.auth import hash_password

logger = logging.getLogger(__name__)


async def seed_admin(session: AsyncSession) -> User | None:
    """Criar o admin se não houver usuários / Create admin if no users exist."""
    result = await session.execute(select(func.count(User.id)))
    count = result.scalar()

    if count:
        logger.info("%d existing user(s), seed skipped", count)
        return None

    admin = User(
        username="admin",
        display_name="PROATI",
        hashed_password=hash_password("admin"),
        role=UserRole.ADMIN,
        is_active=True,
    )
    session.add(admin)
    await session.commit()
    logger.warning("Default administrator created: admin / admin")
    return admin


async def ensure_user(
    session: AsyncSession,
    username: str,
    password: str,
    display_name: str,
    role: UserRole,
    assigned_class: str | None = None,
) -> tuple[User, bool]:
    """Criar o usuário se ainda não existir / Create the user unless it exists. Returns (user, created)."""
    result = await session.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if user is not None:
        return user, False

    user = User(
        username=username,
        display_name=display_name,
        hashed_password=hash_password(password),
        role=role,
        assigned_class=assigned_class,
    )
    session.add(user)
    await session.commit()
    return user, True
