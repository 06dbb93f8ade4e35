"""Pydantic schemas for projects.

- ProjectCreate: name is optional here so the service can report a
  missing name with its own message.
- ProjectUpdate: both fields optional; empty values are ignored.
"""

from datetime import datetime
from typing import Optional

from tasktrack.schemas.common import CamelModel


class ProjectCreate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class ProjectRead(CamelModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ProjectList(CamelModel):
    projects: list[ProjectRead]
    total: int
