"""Unit tests for session token issuing and verification

Tests cover:
- Token creation with the expected claims
- Bearer header extraction (missing, wrong scheme, too short)
- Signature, algorithm and expiry checks
- Missing signing secret
"""

from datetime import timedelta

import jwt
import pytest

from auth.jwt import (
    create_access_token,
    decode_token,
    extract_bearer_token,
    verify_authorization_header,
)
from config import Settings
from errors import (
    InvalidOrExpiredCredential,
    MalformedCredential,
    MissingCredential,
    ServerMisconfigured,
)

SECRET = "unit-test-secret-key-256-bits-minimum-length-required"


@pytest.fixture
def settings() -> Settings:
    return Settings(JWT_SECRET=SECRET, JWT_EXPIRY_MINUTES=60)


class TestCreateAccessToken:
    """Test token creation"""

    def test_token_contains_expected_claims(self, settings):
        token = create_access_token(7, "joana@semed.example.gov.br", "secretaria", settings)

        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["sub"] == "7"
        assert payload["email"] == "joana@semed.example.gov.br"
        assert payload["role"] == "secretaria"
        assert payload["exp"] - payload["iat"] == 60 * 60

    def test_create_without_secret_fails(self):
        with pytest.raises(ServerMisconfigured):
            create_access_token(1, "a@b.com", "admin", Settings(JWT_SECRET=None))


class TestExtractBearerToken:
    """Test Authorization header parsing"""

    @pytest.mark.parametrize("header", [None, "", "Basic dXNlcjpwYXNz", "bearer abcdefghijkl"])
    def test_missing_or_wrong_scheme(self, header):
        with pytest.raises(MissingCredential):
            extract_bearer_token(header)

    def test_short_token_is_malformed(self):
        with pytest.raises(MalformedCredential):
            extract_bearer_token("Bearer abc")

    def test_returns_token(self):
        assert extract_bearer_token("Bearer abcdefghijkl") == "abcdefghijkl"


class TestDecodeToken:
    """Test signature and expiry validation"""

    def test_valid_token_round_trip(self, settings):
        token = create_access_token(3, "x@y.com", "admin", settings)
        assert decode_token(token, settings)["sub"] == "3"

    def test_expired_token_rejected(self, settings):
        token = create_access_token(3, "x@y.com", "admin", settings, expires_delta=timedelta(seconds=-10))

        with pytest.raises(InvalidOrExpiredCredential) as exc_info:
            decode_token(token, settings)
        assert exc_info.value.details == "Token has expired"

    def test_wrong_secret_rejected(self, settings):
        token = create_access_token(3, "x@y.com", "admin", Settings(JWT_SECRET="another-secret-entirely-different"))

        with pytest.raises(InvalidOrExpiredCredential):
            decode_token(token, settings)

    def test_unsigned_token_rejected(self, settings):
        token = jwt.encode({"sub": "1", "exp": 9999999999}, None, algorithm="none")

        with pytest.raises(InvalidOrExpiredCredential):
            decode_token(token, settings)

    def test_token_without_sub_rejected(self, settings):
        token = jwt.encode({"exp": 9999999999}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidOrExpiredCredential):
            decode_token(token, settings)

    def test_missing_secret_is_server_error(self, settings):
        token = create_access_token(3, "x@y.com", "admin", settings)

        with pytest.raises(ServerMisconfigured) as exc_info:
            decode_token(token, Settings(JWT_SECRET=None))
        assert exc_info.value.status_code == 500


def test_verify_authorization_header_end_to_end(settings):
    token = create_access_token(11, "x@y.com", "semad", settings)
    claims = verify_authorization_header(f"Bearer {token}", settings)
    assert claims["sub"] == "11"
    assert claims["role"] == "semad"
