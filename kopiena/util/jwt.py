"""Session token encoding.

Tokens are HS256 JWTs issued by the sign-in flow and carried in the
``auth_token`` cookie. The taxonomy API only reads them.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from kopiena.config import AuthSettings


class TokenPayload(BaseModel):
    """Claims carried by a session token."""

    user_id: str
    email: str
    exp: datetime


class JWTError(Exception):
    """Token could not be decoded, or has expired."""


def create_token(user_id: str, email: str, settings: AuthSettings) -> str:
    """Issue a session token valid for ``settings.jwt_expiry_days``."""
    claims = {
        "user_id": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a session token and check its signature and expiry.

    Args:
        token: Encoded token from the cookie
        settings: Authentication settings

    Returns:
        Decoded claims

    Raises:
        JWTError: If the token is expired, tampered with or malformed
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "user_id"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    return TokenPayload(**claims)
