"""Task API routes.

Key patterns:
- POST for creation; projectId must name one of the caller's projects
- PATCH for partial updates: only keys present in the JSON body are
  applied, so the handler passes model_dump(exclude_unset=True);
  a request with no body is an empty patch
- Query param `search` for filtering by name
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from tasktrack.auth.dependencies import CurrentIdentity, get_current_user
from tasktrack.db.store import Store, get_store
from tasktrack.schemas.common import MessageResponse
from tasktrack.schemas.task import TaskCreate, TaskList, TaskRead, TaskUpdate
from tasktrack.services.task_service import TaskService

router = APIRouter(prefix="/tasks")


def _task_svc(store: Store = Depends(get_store)) -> TaskService:
    return TaskService(store)


@router.get("", response_model=TaskList)
async def list_tasks(
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    tasks = svc.list_tasks(identity.id, search)
    return TaskList(
        tasks=[TaskRead.model_validate(t) for t in tasks],
        total=len(tasks),
    )


@router.post("", response_model=TaskRead, status_code=201)
async def create_task(
    body: TaskCreate,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Create a task. Missing fields get defaults (pending, medium, due now)."""
    task = svc.create_task(
        identity.id,
        name=body.name,
        description=body.description,
        tags=body.tags,
        status=body.status,
        priority=body.priority,
        due=body.due,
        project_id=body.project_id,
    )
    return TaskRead.model_validate(task)


@router.patch("/{task_id}", response_model=TaskRead)
async def patch_task(
    task_id: str,
    body: Optional[TaskUpdate] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    """Partially update a task. 404 if it does not exist, 403 if it is not yours."""
    patch = body.model_dump(exclude_unset=True) if body is not None else {}
    task = svc.patch_task(identity.id, task_id, patch)
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    identity: CurrentIdentity = Depends(get_current_user),
    svc: TaskService = Depends(_task_svc),
):
    svc.delete_task(identity.id, task_id)
    return MessageResponse(message="Task deleted successfully")
