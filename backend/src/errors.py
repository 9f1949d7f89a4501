"""Error taxonomy for the attachment access-control layer.

Every expected failure is an AppError subclass carrying its HTTP status and a
user-facing message. main.py turns them into ``{"error": message}`` bodies;
``details`` is only rendered outside production.
"""

from typing import Optional


class AppError(Exception):
    """Base error for expected failures."""

    kind = "AppError"
    status_code = 400
    default_message = "Requisição inválida"

    def __init__(self, message: Optional[str] = None, *, details: Optional[str] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class MissingCredential(AppError):
    kind = "MissingCredential"
    status_code = 401
    default_message = "Token de autenticação não fornecido"


class MalformedCredential(AppError):
    kind = "MalformedCredential"
    status_code = 401
    default_message = "Token malformado"


class InvalidOrExpiredCredential(AppError):
    kind = "InvalidOrExpiredCredential"
    status_code = 401
    default_message = "Token inválido ou expirado"


class ServerMisconfigured(AppError):
    """Raised when the signing secret is absent. Operator action required."""

    kind = "ServerMisconfigured"
    status_code = 500
    default_message = "Configuração de autenticação ausente no servidor"


class UnknownOrInactivePrincipal(AppError):
    kind = "UnknownOrInactivePrincipal"
    status_code = 401
    default_message = "Usuário não encontrado ou inativo"


class InvalidCredentials(AppError):
    """Login rejected. Same message for unknown, inactive and wrong password."""

    kind = "InvalidCredentials"
    status_code = 401
    default_message = "Credenciais inválidas"


class AccessDenied(AppError):
    kind = "AccessDenied"
    status_code = 403
    default_message = "Acesso negado"


class NotFound(AppError):
    kind = "NotFound"
    status_code = 404
    default_message = "Recurso não encontrado"


class InvalidLifecycleState(AppError):
    kind = "InvalidLifecycleState"
    status_code = 400
    default_message = "Operação não permitida no status atual da matéria"


class UnexpectedFailure(AppError):
    kind = "UnexpectedFailure"
    status_code = 500
    default_message = "Erro interno do servidor"


# Authentication failures are terminal for the request and share one metric label set.
AUTHENTICATION_ERRORS = (
    MissingCredential,
    MalformedCredential,
    InvalidOrExpiredCredential,
    ServerMisconfigured,
    UnknownOrInactivePrincipal,
)
