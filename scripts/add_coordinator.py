"""
Criar o usuário coordenador pedagógico / Create the pedagogical coordinator account.

Usage:
    python -m scripts.add_coordinator [username] [password]
"""

import asyncio
import sys

from lab_scheduler.database import async_session, engine
from lab_scheduler.models.user import UserRole
from lab_scheduler.utils.seed import ensure_user


async def main(username: str = "coord", password: str = "coord123"):
    async with async_session() as session:
        user, created = await ensure_user(
            session,
            username=username,
            password=password,
            display_name="Coordenador Pedagógico",
            role=UserRole.COORDINATOR,
        )
    if created:
        print(f"[OK] Coordinator created: {user.username} (id={user.id})")
    else:
        print(f"[OK] User {user.username} already exists, nothing to do")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main(*sys.argv[1:3]))
