"""Project API routes.

Learn: Routes translate HTTP to ProjectService calls and nothing more.
The service raises typed errors (ValidationError, NotFound) and the
app-level handler turns them into status codes, so there is no
try/except here.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from tasktrack.auth.dependencies import CurrentIdentity, get_current_user
from tasktrack.db.store import Store, get_store
from tasktrack.schemas.common import MessageResponse
from tasktrack.schemas.project import (
    ProjectCreate,
    ProjectList,
    ProjectRead,
    ProjectUpdate,
)
from tasktrack.services.project_service import ProjectService

router = APIRouter(prefix="/projects")


def _project_svc(store: Store = Depends(get_store)) -> ProjectService:
    return ProjectService(store)


@router.get("", response_model=ProjectList)
async def list_projects(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_project_svc),
):
    """List the caller's projects, optionally filtered by name."""
    projects = svc.list_projects(identity.id, search)
    return ProjectList(
        projects=[ProjectRead.model_validate(p) for p in projects],
        total=len(projects),
    )


@router.post("", response_model=ProjectRead, status_code=201)
async def create_project(
    body: ProjectCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_project_svc),
):
    project = svc.create_project(identity.id, body.name, body.description)
    return ProjectRead.model_validate(project)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: str,
    body: Optional[ProjectUpdate] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_project_svc),
):
    """Rename or re-describe a project. Empty values leave the field as is."""
    if body is None:
        body = ProjectUpdate()
    project = svc.update_project(
        identity.id, project_id, name=body.name, description=body.description
    )
    return ProjectRead.model_validate(project)


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: ProjectService = Depends(_project_svc),
):
    """Delete a project and every task attached to it."""
    svc.delete_project(identity.id, project_id)
    return MessageResponse(message="Project deleted successfully")
