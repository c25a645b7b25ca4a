"""
Erros do domínio de agendamento / Scheduling domain errors.

Cada erro carrega um status_code que a camada HTTP traduz diretamente.
Each error carries a status_code the HTTP layer translates directly.
"""


class SchedulingError(Exception):
    """Erro base / Base error."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """Entrada inválida / Malformed input."""

    status_code = 400


class PermissionDenied(SchedulingError):
    """Ação não permitida para o usuário / Action not permitted for principal."""

    status_code = 403


class NotFound(SchedulingError):
    """Agendamento inexistente / Booking does not exist."""

    status_code = 404


class RepositoryError(SchedulingError):
    """Falha do armazenamento / Underlying storage failure."""

    status_code = 500
