"""
Modelo Usuário / User model.
Papel fechado (admin, professor, coordenador) + turma atribuída.
Closed role (admin, teacher, coordinator) + assigned class.
"""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, String, func
from sqlalchemy.orm import Mapped, mapped_column

from lab_scheduler.database import Base


class UserRole(str, enum.Enum):
    """Papel do usuário / User role."""
    ADMIN = "admin"  # PROATI : pode tudo / can do everything
    TEACHER = "teacher"  # agenda apenas para a própria turma / books for own class only
    COORDINATOR = "coordinator"  # apenas visualiza / view only


class User(Base):
    """Usuário da aplicação / Application user."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(150), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.TEACHER, nullable=False)
    assigned_class: Mapped[str | None] = mapped_column(String(10))  # "3A", "1EM-A"
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"
