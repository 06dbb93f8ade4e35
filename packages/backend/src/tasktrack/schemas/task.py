"""Pydantic schemas for tasks.

Learn: Separate schemas for create/update/read keeps the API clean.
- TaskCreate: what you POST to create a task (only name is required,
  and the service checks it)
- TaskUpdate: what you PATCH — which fields were actually sent matters,
  so handlers read model_dump(exclude_unset=True) rather than the values
- TaskRead: what the API returns
"""

from datetime import datetime
from typing import Optional

from tasktrack.schemas.common import CamelModel


class TaskCreate(CamelModel):
    name: Optional[str] = None
    project_id: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[list[str]] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due: Optional[datetime] = None


class TaskUpdate(CamelModel):
    """Partial update — only fields present in the payload are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[list[str]] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due: Optional[datetime] = None


class TaskRead(CamelModel):
    id: str
    project_id: Optional[str] = None
    user_id: str
    name: str
    description: str
    tags: list[str]
    status: str
    priority: str
    due: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TaskList(CamelModel):
    tasks: list[TaskRead]
    total: int
