"""
Criação do schema / Schema creation.

Etapa explícita de implantação : cria as tabelas que faltam e o
administrador padrão. Nunca altera colunas existentes.

Usage:
    DATABASE_URL=postgresql+asyncpg://lab:password@db:5432/lab \
    python -m scripts.init_db
"""

import asyncio

from lab_scheduler.config import settings
from lab_scheduler.database import Base, async_session, engine, init_db
from lab_scheduler.utils.seed import seed_admin


async def main():
    target = settings.DATABASE_URL.split("@")[-1]
    print(f"[init_db] Target: {target}")
    await init_db()
    print(f"[init_db] {len(Base.metadata.sorted_tables)} tables ready")
    async with async_session() as session:
        admin = await seed_admin(session)
    if admin:
        print("[init_db] Default administrator created: admin / admin (change the password!)")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
