"""
Conexão com o banco de dados / Database connection.
Suporta SQLite (dev) e PostgreSQL (prod) via SQLAlchemy 2.0 async.

O schema é criado por uma etapa explícita (scripts/init_db.py), nunca
sondado ou alterado durante as requisições.
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from lab_scheduler.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Configuração do engine / Engine configuration
_engine_kwargs: dict = {
    "echo": False,
}

# PostgreSQL : pool de conexões / connection pooling
if not _is_sqlite:
    _engine_kwargs.update({
        "pool_size": 10,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    })

engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """Dependência FastAPI para obter uma sessão / FastAPI dependency for DB session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind=None):
    """Criar as tabelas (idempotente) / Create tables (idempotent)."""
    # Registrar todos os modelos no metadata / Register every model on the metadata
    import lab_scheduler.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
