"""
Schemas Usuário / User schemas.
Papel fechado ; professores precisam de uma turma válida.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lab_scheduler.catalog import class_for_code
from lab_scheduler.models.user import UserRole


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=200)
    display_name: str = Field(..., min_length=3, max_length=150)
    role: UserRole = UserRole.TEACHER
    assigned_class: str | None = None

    @model_validator(mode="after")
    def check_assigned_class(self):
        if self.role == UserRole.TEACHER:
            if not self.assigned_class:
                raise ValueError("Professores devem selecionar uma turma")
            if class_for_code(self.assigned_class) is None:
                raise ValueError(f"Turma inválida: {self.assigned_class}")
        return self


class UserUpdate(BaseModel):
    display_name: str | None = Field(default=None, min_length=3, max_length=150)
    password: str | None = Field(default=None, min_length=6, max_length=200)
    role: UserRole | None = None
    assigned_class: str | None = None
    is_active: bool | None = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    username: str
    display_name: str
    role: UserRole
    assigned_class: str | None
    is_active: bool
    created_at: datetime | None = None
