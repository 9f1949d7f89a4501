"""Authenticated principal and its resolution from the users table."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from sqlalchemy.orm import Session

from errors import UnknownOrInactivePrincipal
from models.user import User


@dataclass(frozen=True)
class Principal:
    """The actor making a request. Built per request, never persisted."""
    id: int
    name: str
    email: str
    role: str
    tenant_id: Optional[int] = None

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            tenant_id=user.secretaria_id,
        )


class AuthMode(str, Enum):
    TOKEN = "token"
    BYPASS = "bypass"


@dataclass(frozen=True)
class AuthResult:
    """Principal plus how it was obtained.

    Both the token path and the bypass path produce one of these, and every
    attachment operation consumes it the same way.
    """
    principal: Principal
    mode: AuthMode = AuthMode.TOKEN

    @property
    def via_bypass(self) -> bool:
        return self.mode is AuthMode.BYPASS


def resolve_principal(db: Session, user_id: Any) -> Principal:
    """Load the active user behind a token subject.

    Inactive and missing accounts raise the same error so the response does
    not reveal whether an account exists.

    Raises:
        UnknownOrInactivePrincipal: No active user with this id
    """
    try:
        uid = int(user_id)
    except (TypeError, ValueError):
        raise UnknownOrInactivePrincipal()

    user = (
        db.query(User)
        .filter(User.id == uid, User.active.is_(True))
        .first()
    )
    if user is None:
        raise UnknownOrInactivePrincipal()

    return Principal.from_user(user)
