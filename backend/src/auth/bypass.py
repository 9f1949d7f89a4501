"""Authentication bypass for local testing.

When ``AUTH_BYPASS`` is true the token verifier, principal lookup and tenant
checks are skipped and every request runs as a fixed synthetic administrator.
Lifecycle gates still apply. This is a deliberate hole: every request served
through it is logged at WARNING level.
"""

import logging

from config import Settings
from observability.metrics import auth_bypass_requests_total
from .principal import AuthMode, AuthResult, Principal
from .roles import UserRole

logger = logging.getLogger(__name__)

# id 0 never matches a users row; the bypass principal is not persisted anywhere
BYPASS_PRINCIPAL = Principal(
    id=0,
    name="Bypass (teste local)",
    email="bypass@localhost",
    role=UserRole.ADMIN.value,
    tenant_id=None,
)


def bypass_auth_result() -> AuthResult:
    """Return the synthetic principal, logging loudly."""
    auth_bypass_requests_total.inc()
    logger.warning(
        "AUTH_BYPASS active: request served as synthetic admin without authentication"
    )
    return AuthResult(principal=BYPASS_PRINCIPAL, mode=AuthMode.BYPASS)


def check_bypass_configuration(settings: Settings) -> None:
    """Startup check for the bypass switch.

    Raises:
        RuntimeError: If bypass is enabled in a production environment
    """
    if not settings.AUTH_BYPASS:
        return

    if settings.is_production:
        raise RuntimeError("AUTH_BYPASS must not be enabled when ENVIRONMENT=production")

    logger.error(
        "!!! AUTH_BYPASS is ENABLED: authentication and tenant authorization are disabled. "
        "Use only for local testing. !!!"
    )
