"""Unit tests for session token handling."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from kopiena.config import AuthSettings
from kopiena.domain.service import JWTService
from kopiena.util.jwt import JWTError, create_token


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


class TestJWTService:
    """Tests for JWTService."""

    def test_valid_token_resolves_user(self, settings):
        service = JWTService(settings)
        token = create_token("user-1", "a@example.com", settings)

        assert service.get_user_id_from_token(token) == "user-1"
        assert service.verify_token(token).email == "a@example.com"

    def test_missing_token_is_anonymous(self, settings):
        assert JWTService(settings).get_user_id_from_token(None) is None
        assert JWTService(settings).get_user_id_from_token("") is None

    def test_garbage_token_is_anonymous(self, settings):
        service = JWTService(settings)

        assert service.get_user_id_from_token("not-a-jwt") is None
        with pytest.raises(JWTError):
            service.verify_token("not-a-jwt")

    def test_foreign_signature_is_rejected(self, settings):
        token = create_token("user-1", "a@example.com", AuthSettings(jwt_secret="other"))

        assert JWTService(settings).get_user_id_from_token(token) is None

    def test_expired_token_is_rejected(self, settings):
        token = jwt.encode(
            {
                "user_id": "user-1",
                "email": "a@example.com",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError, match="expired"):
            JWTService(settings).verify_token(token)
