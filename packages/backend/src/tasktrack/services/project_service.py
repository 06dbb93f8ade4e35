"""Project service — owner-scoped project CRUD with cascading delete.

Learn: Every method takes the owner's id explicitly; the service has no
idea who "the current user" is. A project that exists but belongs to
someone else is reported exactly like one that does not exist.

Deleting a project removes every task attached to it in the same locked
operation.
"""

from dataclasses import replace
from typing import Optional

import structlog

from tasktrack.db.models import Project, next_timestamp
from tasktrack.db.store import Store
from tasktrack.errors import NotFound, ValidationError

logger = structlog.get_logger()


def matches_search(name: str, search: Optional[str]) -> bool:
    """Case-insensitive substring match; an empty search matches everything."""
    if not search:
        return True
    return search.lower() in name.lower()


class ProjectService:
    """Business logic for projects."""

    def __init__(self, store: Store):
        self.store = store

    # ─── Read ────────────────────────────────────────────

    def list_projects(self, owner_id: str, search: Optional[str] = None) -> list[Project]:
        with self.store.lock:
            projects = self.store.projects.list_by_owner(owner_id)
        return [p for p in projects if matches_search(p.name, search)]

    def get_owned(self, owner_id: str, project_id: str) -> Optional[Project]:
        project = self.store.projects.get(project_id)
        if project is None or project.user_id != owner_id:
            return None
        return project

    # ─── Create ──────────────────────────────────────────

    def create_project(
        self,
        owner_id: str,
        name: Optional[str],
        description: Optional[str] = None,
    ) -> Project:
        if not name:
            raise ValidationError("Project name is required")

        project = Project(user_id=owner_id, name=name, description=description)
        with self.store.lock:
            self.store.projects.add(project)

        logger.info("projects.created", project_id=project.id, user_id=owner_id)
        return project

    # ─── Update ──────────────────────────────────────────

    def update_project(
        self,
        owner_id: str,
        project_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Project:
        """Overwrite name/description when given a non-empty value.

        Empty strings count as "not provided", so a description cannot be
        cleared through this path. updated_at is refreshed regardless.
        """
        with self.store.lock:
            project = self.get_owned(owner_id, project_id)
            if project is None:
                raise NotFound("Project not found")

            changes = {}
            if name:
                changes["name"] = name
            if description:
                changes["description"] = description

            updated = replace(
                project, **changes, updated_at=next_timestamp(project.updated_at)
            )
            self.store.projects.save(updated)

        logger.info(
            "projects.updated",
            project_id=project_id,
            user_id=owner_id,
            fields=sorted(changes),
        )
        return updated

    # ─── Delete ──────────────────────────────────────────

    def delete_project(self, owner_id: str, project_id: str) -> Project:
        """Delete an owned project and every task attached to it."""
        with self.store.lock:
            if self.get_owned(owner_id, project_id) is None:
                raise NotFound("Project not found")
            removed_tasks = self.store.tasks.remove_by_project(project_id)
            project = self.store.projects.remove(project_id)

        logger.info(
            "projects.deleted",
            project_id=project_id,
            user_id=owner_id,
            cascaded_tasks=len(removed_tasks),
        )
        return project
