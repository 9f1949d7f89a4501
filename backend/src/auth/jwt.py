"""Session token issuing and verification.

Tokens are HS256-signed JWTs. Verification is transport-independent: it takes
the raw ``Authorization`` header value and returns the decoded claims or
raises one of the credential errors.

Claims:
- sub: user id as string
- email: user email (display/audit only, never trusted for authorization)
- role: role at issue time (informational; the database row is authoritative)
- iat / exp: issue and expiry timestamps

Example Token Payload:
{
  "sub": "42",
  "email": "joana@semed.example.gov.br",
  "role": "secretaria",
  "iat": 1704368400,
  "exp": 1704454800
}
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from config import Settings
from errors import (
    InvalidOrExpiredCredential,
    MalformedCredential,
    MissingCredential,
    ServerMisconfigured,
)

BEARER_PREFIX = "Bearer "
MIN_TOKEN_LENGTH = 10


def _require_secret(settings: Settings) -> str:
    if not settings.JWT_SECRET:
        raise ServerMisconfigured()
    return settings.JWT_SECRET


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for an authenticated user.

    Args:
        user_id: User primary key
        email: User's email address
        role: User's role
        settings: Application settings (secret, algorithm, expiry)
        expires_delta: Override the configured lifetime

    Returns:
        str: Signed JWT

    Raises:
        ServerMisconfigured: If JWT_SECRET is not set
    """
    secret = _require_secret(settings)
    now = datetime.now(timezone.utc)
    expiration = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRY_MINUTES))

    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(expiration.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` value.

    Raises:
        MissingCredential: Header absent or not using the Bearer scheme
        MalformedCredential: Token shorter than MIN_TOKEN_LENGTH
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingCredential()

    token = authorization[len(BEARER_PREFIX):].strip()
    if len(token) < MIN_TOKEN_LENGTH:
        raise MalformedCredential()
    return token


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify signature and expiry, returning the claim set.

    Only the configured algorithm is accepted, so unsigned ("none") tokens
    are rejected like any other bad signature.

    Raises:
        ServerMisconfigured: If JWT_SECRET is not set
        InvalidOrExpiredCredential: Bad signature, expired, or missing sub/exp
    """
    secret = _require_secret(settings)

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidOrExpiredCredential(details="Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidOrExpiredCredential(details=f"Invalid token: {e}") from e


def verify_authorization_header(authorization: Optional[str], settings: Settings) -> Dict[str, Any]:
    """Validate a raw Authorization header value end to end.

    Pure validation with no side effects. On success the returned claims
    always contain ``sub``.
    """
    token = extract_bearer_token(authorization)
    return decode_token(token, settings)
