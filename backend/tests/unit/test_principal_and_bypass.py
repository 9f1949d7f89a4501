"""Unit tests for principal resolution and the bypass switch"""

import logging

import pytest

from auth.bypass import BYPASS_PRINCIPAL, bypass_auth_result, check_bypass_configuration
from auth.principal import AuthMode, AuthResult, Principal, resolve_principal
from config import Settings
from errors import UnknownOrInactivePrincipal


class TestResolvePrincipal:

    def test_active_user_resolved(self, db_session, secretaria_user, semed):
        principal = resolve_principal(db_session, str(secretaria_user.id))

        assert principal.id == secretaria_user.id
        assert principal.role == "secretaria"
        assert principal.tenant_id == semed.id

    def test_inactive_user_rejected(self, db_session, make_user):
        user = make_user("inativo@example.com", "secretaria", active=False)

        with pytest.raises(UnknownOrInactivePrincipal):
            resolve_principal(db_session, user.id)

    @pytest.mark.parametrize("subject", ["9999", "abc", None])
    def test_unknown_or_garbage_subject_rejected(self, db_session, subject):
        with pytest.raises(UnknownOrInactivePrincipal) as exc_info:
            resolve_principal(db_session, subject)
        assert exc_info.value.status_code == 401


class TestAuthResult:

    def test_token_mode_is_not_bypass(self):
        result = AuthResult(principal=Principal(1, "A", "a@b.com", "admin"))
        assert result.mode is AuthMode.TOKEN
        assert not result.via_bypass

    def test_bypass_result(self):
        result = bypass_auth_result()

        assert result.via_bypass
        assert result.principal is BYPASS_PRINCIPAL
        assert result.principal.id == 0
        assert result.principal.tenant_id is None


class TestCheckBypassConfiguration:

    def test_disabled_is_silent(self, caplog):
        with caplog.at_level(logging.ERROR):
            check_bypass_configuration(Settings(AUTH_BYPASS=False, ENVIRONMENT="production"))
        assert caplog.records == []

    def test_enabled_in_development_logs_error(self, caplog):
        with caplog.at_level(logging.ERROR):
            check_bypass_configuration(Settings(AUTH_BYPASS=True, ENVIRONMENT="development"))
        assert any("AUTH_BYPASS is ENABLED" in r.getMessage() for r in caplog.records)

    def test_enabled_in_production_refuses_to_start(self):
        with pytest.raises(RuntimeError):
            check_bypass_configuration(Settings(AUTH_BYPASS=True, ENVIRONMENT="Production"))
