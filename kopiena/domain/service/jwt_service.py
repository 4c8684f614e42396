"""Session token domain service."""

import logfire

from kopiena.config import AuthSettings
from kopiena.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Resolves the caller behind an ``auth_token`` cookie."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Raises:
            JWTError: If the token is invalid or expired
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", reason=str(e))
            raise

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Caller's user ID, or None for anonymous callers.

        A missing, expired or malformed token all read as anonymous; use
        cases decide whether that is an error.
        """
        if not token:
            return None
        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
