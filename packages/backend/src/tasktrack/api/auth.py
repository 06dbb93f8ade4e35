"""Auth API — registration and login.

Learn: Both routes answer with the user (minus password hash) and a
bearer token, so a client can start calling protected routes right
after registering.
- POST /auth/register → 201, or 400 if the email is taken
- POST /auth/login → 200, or 401 with one generic message for any failure

bcrypt and JWT signing are opaque to us. If either blows up, the
client gets a 500 with a fixed message and the traceback goes to the log.
"""

import structlog
from fastapi import APIRouter, Depends

from tasktrack.auth.jwt import create_access_token
from tasktrack.db.store import Store, get_store
from tasktrack.errors import TaskTrackError, UnexpectedError
from tasktrack.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from tasktrack.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth")


def _user_svc(store: Store = Depends(get_store)) -> UserService:
    return UserService(store)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(_user_svc)):
    """Create a new user account and return it with a token."""
    try:
        user = svc.register(name=body.name, email=body.email, password=body.password)
        token = create_access_token(user.id, user.email)
    except TaskTrackError:
        raise
    except Exception as e:
        logger.exception("auth.register_failed")
        raise UnexpectedError("Registration failed") from e

    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: UserService = Depends(_user_svc)):
    """Login with email and password → user + JWT."""
    try:
        user = svc.authenticate(email=body.email, password=body.password)
        token = create_access_token(user.id, user.email)
    except TaskTrackError:
        raise
    except Exception as e:
        logger.exception("auth.login_failed")
        raise UnexpectedError("Login failed") from e

    logger.info("auth.logged_in", user_id=user.id)
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)
