"""Authorization guard: tenant ownership checks on matter resources.

The guard is resource-agnostic. Callers pass the secretaria that owns the
resource (for attachments, the parent matter's secretaria) and the action.
A denial is always the generic AccessDenied, so it never tells an
out-of-tenant caller whether the resource exists.
"""

import logging
from enum import Enum
from typing import Optional

from domain.decisions import GuardDecision
from errors import AccessDenied
from .principal import Principal
from .roles import has_cross_tenant_scope

logger = logging.getLogger(__name__)


class Action(str, Enum):
    READ = "read"
    DELETE = "delete"


class AuthorizationGuard:
    """Decide whether a principal may perform an action on a tenant's resource.

    Policy:
    - bypass enabled: always allow (local testing only)
    - admin / semad: allow
    - any other role: allow only when principal.tenant_id == resource_tenant_id

    Example:
        guard = AuthorizationGuard(bypass_enabled=settings.AUTH_BYPASS)
        guard.authorize(principal, matter.secretaria_id, Action.DELETE).raise_if_denied()
    """

    def __init__(self, bypass_enabled: bool = False):
        self._bypass_enabled = bypass_enabled

    @property
    def bypass_enabled(self) -> bool:
        return self._bypass_enabled

    def authorize(
        self,
        principal: Principal,
        resource_tenant_id: Optional[int],
        action: Action,
    ) -> GuardDecision:
        if self._bypass_enabled:
            return GuardDecision.allow()

        if has_cross_tenant_scope(principal.role):
            return GuardDecision.allow()

        if principal.tenant_id is not None and principal.tenant_id == resource_tenant_id:
            return GuardDecision.allow()

        logger.info(
            f"Authorization denied: user_id={principal.id}, role={principal.role}, "
            f"action={action.value}, principal_tenant={principal.tenant_id}, "
            f"resource_tenant={resource_tenant_id}"
        )
        return GuardDecision.deny(AccessDenied)
