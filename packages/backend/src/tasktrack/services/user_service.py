"""User service — registration and credential checks.

Learn: Emails are normalized (lowercased, all whitespace removed) before
both storage and lookup, so "T@X.com " and "t@x.com" are one account.
Login failures never say whether the email exists.
"""

import re

import structlog

from tasktrack.auth.password import hash_password, verify_password
from tasktrack.db.models import User
from tasktrack.db.store import Store
from tasktrack.errors import DuplicateEmail, InvalidCredentials

logger = structlog.get_logger()

_WHITESPACE = re.compile(r"\s+")


def normalize_email(email: str) -> str:
    return _WHITESPACE.sub("", email.lower())


class UserService:
    """Credential store operations."""

    def __init__(self, store: Store):
        self.store = store

    def register(self, name: str, email: str, password: str) -> User:
        """Create a user. Raises DuplicateEmail if the normalized email is taken."""
        email = normalize_email(email)
        if self.store.users.get_by_email(email) is not None:
            raise DuplicateEmail()

        # bcrypt is slow, so hash outside the lock and re-check under it
        user = User(name=name, email=email, password_hash=hash_password(password))
        with self.store.lock:
            if self.store.users.get_by_email(email) is not None:
                raise DuplicateEmail()
            self.store.users.add(user)

        logger.info("auth.registered", user_id=user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user for these credentials or raise InvalidCredentials."""
        email = normalize_email(email)
        with self.store.lock:
            user = self.store.users.get_by_email(email)

        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentials()
        return user
