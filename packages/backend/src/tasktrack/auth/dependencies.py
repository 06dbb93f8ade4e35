"""FastAPI auth dependencies — the authorization gate.

Learn: get_current_user is attached to every protected router and is
also requested by each protected handler. FastAPI caches a dependency
per request, so the token is verified once.

The gate trusts the token claims and does not look the user up again,
which is why CurrentIdentity.name is always empty here.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Header

from tasktrack.auth.jwt import TokenError, verify_token
from tasktrack.errors import Unauthenticated

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated caller, as described by its token."""

    id: str
    email: str
    name: str = ""


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header, else None."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    return token or None


def authenticate(authorization: Optional[str]) -> CurrentIdentity:
    """Resolve a raw Authorization header into an identity, or raise Unauthenticated."""
    token = parse_bearer(authorization)
    if token is None:
        raise Unauthenticated("missing token")
    try:
        payload = verify_token(token)
    except TokenError as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise Unauthenticated("invalid token")
    return CurrentIdentity(id=str(payload["id"]), email=str(payload["email"]))


async def get_current_user(
    authorization: Optional[str] = Header(None),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if missing or invalid)."""
    return authenticate(authorization)
