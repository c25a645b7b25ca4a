"""
CRUD Usuários / User CRUD routes.
Restrito ao administrador (PROATI) / Administrator only.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lab_scheduler.catalog import class_for_code
from lab_scheduler.database import get_db
from lab_scheduler.models.user import User, UserRole
from lab_scheduler.schemas.user import UserCreate, UserRead, UserUpdate
from lab_scheduler.api.deps import require_admin
from lab_scheduler.utils.auth import hash_password

router = APIRouter()


@router.get("/", response_model=list[UserRead])
async def list_users(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Listar usuários / List users."""
    result = await db.execute(select(User).order_by(User.username))
    return result.scalars().all()


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Obter um usuário / Get a user."""
    target = await db.get(User, user_id)
    if not target:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    return target


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Criar um usuário / Create a user."""
    existing = await db.execute(select(User).where(User.username == data.username))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Nome de usuário já existe")

    new_user = User(
        username=data.username,
        display_name=data.display_name,
        hashed_password=hash_password(data.password),
        role=data.role,
        assigned_class=data.assigned_class if data.role == UserRole.TEACHER else None,
    )
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)
    return new_user


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Modificar um usuário / Update a user."""
    target = await db.get(User, user_id)
    if not target:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")

    if data.display_name is not None:
        target.display_name = data.display_name
    if data.password is not None:
        target.hashed_password = hash_password(data.password)
    if data.is_active is not None:
        target.is_active = data.is_active
    if data.role is not None:
        target.role = data.role
    if data.assigned_class is not None:
        target.assigned_class = data.assigned_class

    if target.role == UserRole.TEACHER:
        if not target.assigned_class or class_for_code(target.assigned_class) is None:
            raise HTTPException(status_code=400, detail="Professores devem selecionar uma turma válida")
    else:
        target.assigned_class = None

    await db.flush()
    await db.refresh(target)
    return target


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Excluir um usuário / Delete a user."""
    target = await db.get(User, user_id)
    if not target:
        raise HTTPException(status_code=404, detail="Usuário não encontrado")
    if target.id == admin.id:
        raise HTTPException(status_code=400, detail="Não é possível excluir o próprio usuário")
    await db.delete(target)
