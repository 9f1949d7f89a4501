"""FastAPI dependencies for authentication and authorization.

This module provides dependency injection functions for:
- Verifying the bearer token and loading the active principal
- Substituting the synthetic principal when AUTH_BYPASS is on
- Building the authorization guard from settings

Usage:
    @router.get("/attachments/{attachment_id}/download")
    def download(attachment_id: int, auth: CurrentAuth):
        ...
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_db
from errors import AUTHENTICATION_ERRORS
from observability.metrics import auth_failures_total
from .bypass import bypass_auth_result
from .jwt import verify_authorization_header
from .policy import AuthorizationGuard
from .principal import AuthMode, AuthResult, resolve_principal

logger = logging.getLogger(__name__)


def get_auth_result(
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthResult:
    """Authenticate the request.

    This dependency:
    1. Returns the synthetic bypass principal when AUTH_BYPASS is on
    2. Otherwise validates the Authorization header and token signature
    3. Loads the user and requires it to be active

    Raises:
        MissingCredential / MalformedCredential / InvalidOrExpiredCredential (401)
        UnknownOrInactivePrincipal (401)
        ServerMisconfigured (500): JWT_SECRET is not configured
    """
    if settings.AUTH_BYPASS:
        return bypass_auth_result()

    try:
        claims = verify_authorization_header(authorization, settings)
        principal = resolve_principal(db, claims.get("sub"))
    except AUTHENTICATION_ERRORS as e:
        auth_failures_total.labels(reason=e.kind).inc()
        if e.status_code >= 500:
            logger.error(f"Authentication unavailable: {e.kind}: {e.message}")
        else:
            logger.info(f"Authentication failed: {e.kind}")
        raise

    return AuthResult(principal=principal, mode=AuthMode.TOKEN)


def get_authorization_guard(settings: Settings = Depends(get_settings)) -> AuthorizationGuard:
    """Build the authorization guard with the bypass flag from settings."""
    return AuthorizationGuard(bypass_enabled=settings.AUTH_BYPASS)


# Type aliases for dependency injection
CurrentAuth = Annotated[AuthResult, Depends(get_auth_result)]
CurrentGuard = Annotated[AuthorizationGuard, Depends(get_authorization_guard)]
