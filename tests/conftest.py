"""Fixtures partilhadas / Shared fixtures."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lab_scheduler.database import init_db
from lab_scheduler.models.user import UserRole
from lab_scheduler.repositories.memory import InMemoryBookingRepository
from lab_scheduler.services.access_policy import Principal
from lab_scheduler.services.booking_service import BookingService

from tests.factories import RecordingNotifier


@pytest.fixture
def repo():
    return InMemoryBookingRepository()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def service(repo, notifier):
    return BookingService(repo, notifier=notifier)


@pytest.fixture
def admin():
    return Principal(id=1, role=UserRole.ADMIN, name="admin")


@pytest.fixture
def teacher():
    return Principal(id=2, role=UserRole.TEACHER, assigned_class="3A", name="maria")


@pytest.fixture
def other_teacher():
    return Principal(id=3, role=UserRole.TEACHER, assigned_class="3B", name="joao")


@pytest.fixture
def coordinator():
    return Principal(id=4, role=UserRole.COORDINATOR, name="coord")


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
