"""Authentication endpoints

Provides endpoints for user login and retrieving the current principal.
"""

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from audit.service import client_ip, log_audit_event
from config import Settings, get_settings
from database import get_db
from errors import InvalidCredentials
from models.user import User
from .dependencies import CurrentAuth
from .jwt import create_access_token
from .password import verify_password
from .schemas import LoginRequest, LoginResponse, PrincipalResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Authenticate user and return an access token.

    Unknown email, wrong password and inactive account all produce the same
    401 so the endpoint cannot be used to enumerate accounts. Both outcomes
    are written to the audit trail.

    Raises:
        InvalidCredentials (401): Credentials rejected
        ServerMisconfigured (500): JWT_SECRET or PASSWORD_PEPPER missing
    """
    user = db.query(User).filter(User.email == credentials.email.lower()).first()

    if not user or not user.active or not verify_password(credentials.password, user.password_hash, settings):
        reason = "invalid_credentials" if not user or user.active else "account_inactive"
        log_audit_event(
            db,
            action="LOGIN_FAILED",
            entity_type="user",
            entity_id=user.id if user else None,
            user_id=user.id if user else None,
            metadata={"email": credentials.email, "reason": reason},
            ip_address=client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
        db.commit()
        logger.info(f"Login failed: reason={reason}")
        raise InvalidCredentials()

    access_token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        settings=settings,
    )

    user.last_login_at = datetime.now(timezone.utc)
    log_audit_event(
        db,
        action="LOGIN_SUCCESS",
        entity_type="user",
        entity_id=user.id,
        user_id=user.id,
        metadata={"email": user.email},
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    db.commit()

    logger.info(f"Login succeeded: user_id={user.id}, role={user.role}")
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.JWT_EXPIRY_MINUTES * 60,
    )


@router.get("/me", response_model=PrincipalResponse)
def get_me(auth: CurrentAuth):
    """Return the principal resolved for this request."""
    principal = auth.principal
    return PrincipalResponse(
        id=principal.id,
        name=principal.name,
        email=principal.email,
        role=principal.role,
        tenant_id=principal.tenant_id,
        bypass=auth.via_bypass,
    )
