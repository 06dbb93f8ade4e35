"""JWT token creation and verification.

Learn: The token is the only thing a protected route trusts. It carries
the user's id and email as claims and expires after
settings.access_token_expire_minutes (one hour by default). No server-side
session exists, so nothing needs to be looked up to authorize a request.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from tasktrack.config import settings


class TokenError(Exception):
    """Raised when token creation/verification fails."""


def create_access_token(
    user_id: str,
    email: str,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed access token for the given identity claims."""
    now = datetime.now(timezone.utc)
    expires = now + timedelta(
        minutes=expires_minutes or settings.access_token_expire_minutes
    )
    payload = {
        "id": user_id,
        "email": email,
        "exp": expires,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict:
    """Verify and decode a JWT token.

    Returns the payload dict on success.
    Raises TokenError on failure, including a well-signed token that
    lacks the identity claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id", "email"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
    return payload
