"""User roles and tenant scope for the gazette backoffice.

Role model (two tiers):
- ADMIN: full system access, every secretaria
- SEMAD: central registry staff (Secretaria Municipal de Administração),
  reviews and publishes matters of every secretaria
- SECRETARIA: department staff, restricted to their own secretaria
- PUBLICO: public account, no secretaria, sees nothing tenant-owned

Cross-tenant roles are always allowed by the authorization guard. Every other
role, including any value not listed here, must match the resource's
secretaria.
"""

from enum import Enum
from typing import FrozenSet, Union


class UserRole(str, Enum):
    """User roles.

    Values are stored as TEXT in the database and must match exactly.
    """
    ADMIN = "admin"
    SEMAD = "semad"
    SECRETARIA = "secretaria"
    PUBLICO = "publico"


CROSS_TENANT_ROLES: FrozenSet[UserRole] = frozenset({UserRole.ADMIN, UserRole.SEMAD})


def has_cross_tenant_scope(role: Union[UserRole, str]) -> bool:
    """Check whether a role sees resources of every secretaria.

    Examples:
        >>> has_cross_tenant_scope("semad")
        True
        >>> has_cross_tenant_scope(UserRole.SECRETARIA)
        False
        >>> has_cross_tenant_scope("superuser")
        False
    """
    try:
        return UserRole(role) in CROSS_TENANT_ROLES
    except ValueError:
        return False
