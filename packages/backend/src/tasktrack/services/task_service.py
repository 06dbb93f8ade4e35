"""Task service — owner-scoped task CRUD with field-level patching.

Learn: Two ownership behaviours live here on purpose:
- patch_task looks the task up by id alone, so a non-owner gets
  Forbidden (403) rather than NotFound.
- delete_task only ever sees the caller's own tasks, so a non-owner
  gets NotFound (404).

Patching overwrites exactly the fields present in the payload, falsy
values included (an empty description clears it). An explicit None
clears `due` and is ignored for the other fields. Due dates are stored
in UTC; one sent without an offset is taken to be UTC.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

import structlog

from tasktrack.db.models import Task, as_utc, next_timestamp, utcnow
from tasktrack.db.store import Store
from tasktrack.errors import Forbidden, InvalidReference, NotFound, ValidationError
from tasktrack.services.project_service import matches_search

logger = structlog.get_logger()

DEFAULT_STATUS = "pending"
DEFAULT_PRIORITY = "medium"

PATCHABLE_FIELDS = ("name", "description", "tags", "status", "priority", "due")
NULLABLE_FIELDS = {"due"}


class TaskService:
    """Business logic for tasks."""

    def __init__(self, store: Store):
        self.store = store

    # ─── Read ────────────────────────────────────────────

    def list_tasks(self, owner_id: str, search: Optional[str] = None) -> list[Task]:
        with self.store.lock:
            tasks = self.store.tasks.list_by_owner(owner_id)
        return [t for t in tasks if matches_search(t.name, search)]

    # ─── Create ──────────────────────────────────────────

    def create_task(
        self,
        owner_id: str,
        name: Optional[str],
        description: Optional[str] = None,
        tags: Optional[list[str]] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        due: Optional[datetime] = None,
        project_id: Optional[str] = None,
    ) -> Task:
        """Create a task, optionally attached to one of the owner's projects.

        Raises ValidationError if name is empty, InvalidReference if
        project_id does not name a project owned by owner_id.
        """
        if not name:
            raise ValidationError("Task name is required")

        with self.store.lock:
            if project_id:
                project = self.store.projects.get(project_id)
                if project is None or project.user_id != owner_id:
                    raise InvalidReference("Invalid project ID")

            now = utcnow()
            task = Task(
                user_id=owner_id,
                project_id=project_id or None,
                name=name,
                description=description or "",
                tags=list(tags) if tags else [],
                status=status or DEFAULT_STATUS,
                priority=priority or DEFAULT_PRIORITY,
                due=as_utc(due) if due is not None else now,
                created_at=now,
            )
            self.store.tasks.add(task)

        logger.info(
            "tasks.created",
            task_id=task.id,
            user_id=owner_id,
            project_id=task.project_id,
        )
        return task

    # ─── Update ──────────────────────────────────────────

    def patch_task(self, owner_id: str, task_id: str, patch: dict[str, Any]) -> Task:
        """Apply the fields present in `patch` and refresh updated_at.

        Keys outside PATCHABLE_FIELDS are ignored; project and owner
        cannot be changed this way.
        """
        changes = {}
        for key in PATCHABLE_FIELDS:
            if key not in patch:
                continue
            value = patch[key]
            if value is None and key not in NULLABLE_FIELDS:
                continue
            if key == "tags":
                value = list(value)
            elif key == "due" and value is not None:
                value = as_utc(value)
            changes[key] = value

        with self.store.lock:
            task = self.store.tasks.get(task_id)
            if task is None:
                raise NotFound("Task not found")
            if task.user_id != owner_id:
                raise Forbidden()

            updated = replace(
                task, **changes, updated_at=next_timestamp(task.updated_at)
            )
            self.store.tasks.save(updated)

        logger.info(
            "tasks.patched", task_id=task_id, user_id=owner_id, fields=sorted(changes)
        )
        return updated

    # ─── Delete ──────────────────────────────────────────

    def delete_task(self, owner_id: str, task_id: str) -> Task:
        with self.store.lock:
            task = self.store.tasks.get(task_id)
            if task is None or task.user_id != owner_id:
                raise NotFound("Task not found")
            self.store.tasks.remove(task_id)

        logger.info("tasks.deleted", task_id=task_id, user_id=owner_id)
        return task
