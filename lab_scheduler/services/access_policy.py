"""
Política de acesso / Access policy.

Funções puras : (papel + turma atribuída, série/turma do agendamento) -> ações permitidas.
Pure functions: (role + assigned class, booking grade/class) -> permitted actions.
"""

import enum
import re
from dataclasses import dataclass

from lab_scheduler.catalog import class_for_code
from lab_scheduler.errors import PermissionDenied
from lab_scheduler.models.user import User, UserRole

_CLASS_CODE = re.compile(r"^(\d+)([A-Za-z])$")


class Action(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    COMPLETE = "complete"
    VIEW = "view"


_DENIED_MESSAGES = {
    Action.CREATE: "Você só pode criar agendamentos para a sua turma",
    Action.EDIT: "Você só pode editar agendamentos da sua turma",
    Action.DELETE: "Você só pode excluir agendamentos da sua turma",
    Action.COMPLETE: "Você só pode marcar como concluído agendamentos da sua turma",
    Action.VIEW: "Acesso negado",
}


@dataclass(frozen=True)
class Principal:
    """Usuário autenticado que executa a ação / Authenticated actor."""
    id: int
    role: UserRole
    assigned_class: str | None = None
    name: str = ""

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, role=user.role, assigned_class=user.assigned_class, name=user.username)


def parse_assigned_class(code: str | None) -> tuple[int, str] | None:
    """Decompor "3A" em (3, "A") / Split "3A" into (3, "A").

    Códigos do catálogo ("1EM-A") têm prioridade ; senão dígitos iniciais -> série,
    letra final -> turma.
    """
    if not code:
        return None
    known = class_for_code(code)
    if known:
        return known
    match = _CLASS_CODE.match(code.strip())
    if not match:
        return None
    return int(match.group(1)), match.group(2).upper()


def can_act(principal: Principal, action: Action, booking) -> bool:
    """Verificar se o usuário pode executar a ação / Check whether the principal may act.

    `booking` é qualquer objeto com grade_id e grade_class (modelo, draft, schema).
    """
    if principal.role == UserRole.ADMIN:
        return True
    if action == Action.VIEW:
        return principal.role in (UserRole.TEACHER, UserRole.COORDINATOR)
    if principal.role != UserRole.TEACHER:
        return False

    own = parse_assigned_class(principal.assigned_class)
    if own is None:
        return False
    return own == (booking.grade_id, booking.grade_class)


def ensure_can_act(principal: Principal, action: Action, booking) -> None:
    """Levantar PermissionDenied se proibido / Raise PermissionDenied when not allowed."""
    if not can_act(principal, action, booking):
        raise PermissionDenied(_DENIED_MESSAGES[action])


def can_view(principal: Principal) -> bool:
    # VIEW não depende do agendamento / VIEW does not depend on the booking
    return can_act(principal, Action.VIEW, None)
