"""Entity records held by the in-memory store.

Learn: Plain dataclasses instead of ORM rows. Records are treated as
values: services build a modified copy with dataclasses.replace() and
hand it back to the repository, so a stored record is never half-updated.

- User: credentials + display name. email is normalized before storage.
- Project: owned by exactly one user (user_id never changes).
- Task: owned by one user, optionally attached to one of that user's projects.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def as_utc(value: datetime) -> datetime:
    """Normalize to UTC; a naive datetime is taken to already be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_timestamp(previous: datetime) -> datetime:
    """Current time, but always strictly after `previous`."""
    now = utcnow()
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


@dataclass
class User:
    name: str
    email: str
    password_hash: str
    id: str = field(default_factory=new_id)


@dataclass
class Project:
    user_id: str
    name: str
    description: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = self.created_at


@dataclass
class Task:
    user_id: str
    name: str
    project_id: Optional[str] = None
    description: str = ""
    tags: list[str] = field(default_factory=list)
    status: str = "pending"
    priority: str = "medium"
    due: Optional[datetime] = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if self.updated_at is None:
            self.updated_at = self.created_at
