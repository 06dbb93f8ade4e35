"""Repository contracts and their in-memory implementations.

Learn: Services depend on the Protocols, not on the dict-backed classes,
so a different backing store can be dropped in without touching the
ownership and cascade rules.

In-memory layout: one dict per entity keyed by id (insertion ordered,
which gives listing order for free) plus secondary indexes so owner and
project lookups never scan the whole collection. The indexes are dicts
used as ordered sets.

None of these classes lock. Store.lock is held by the services around
each complete operation.
"""

from typing import Iterable, Optional, Protocol

from tasktrack.db.models import Project, Task, User


class UserRepository(Protocol):
    """Contract for user persistence."""
    def add(self, user: User) -> None: ...
    def get(self, user_id: str) -> Optional[User]: ...
    def get_by_email(self, email: str) -> Optional[User]: ...


class ProjectRepository(Protocol):
    """Contract for project persistence."""
    def add(self, project: Project) -> None: ...
    def save(self, project: Project) -> None: ...
    def get(self, project_id: str) -> Optional[Project]: ...
    def list_by_owner(self, user_id: str) -> list[Project]: ...
    def remove(self, project_id: str) -> Optional[Project]: ...


class TaskRepository(Protocol):
    """Contract for task persistence."""
    def add(self, task: Task) -> None: ...
    def save(self, task: Task) -> None: ...
    def get(self, task_id: str) -> Optional[Task]: ...
    def list_by_owner(self, user_id: str) -> list[Task]: ...
    def remove(self, task_id: str) -> Optional[Task]: ...
    def remove_by_project(self, project_id: str) -> list[Task]: ...


def _index_add(index: dict[str, dict[str, None]], key: str, entity_id: str) -> None:
    index.setdefault(key, {})[entity_id] = None


def _index_discard(index: dict[str, dict[str, None]], key: str, entity_id: str) -> None:
    bucket = index.get(key)
    if bucket is None:
        return
    bucket.pop(entity_id, None)
    if not bucket:
        del index[key]


class InMemoryUserRepository:
    def __init__(self):
        self._by_id: dict[str, User] = {}
        self._by_email: dict[str, str] = {}

    def add(self, user: User) -> None:
        self._by_id[user.id] = user
        self._by_email[user.email] = user.id

    def get(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._by_email.get(email)
        return self._by_id.get(user_id) if user_id else None

    def __len__(self) -> int:
        return len(self._by_id)


class InMemoryProjectRepository:
    def __init__(self):
        self._by_id: dict[str, Project] = {}
        self._by_owner: dict[str, dict[str, None]] = {}

    def add(self, project: Project) -> None:
        self._by_id[project.id] = project
        _index_add(self._by_owner, project.user_id, project.id)

    def save(self, project: Project) -> None:
        # Owner is immutable, so the owner index needs no maintenance
        if project.id not in self._by_id:
            raise KeyError(project.id)
        self._by_id[project.id] = project

    def get(self, project_id: str) -> Optional[Project]:
        return self._by_id.get(project_id)

    def list_by_owner(self, user_id: str) -> list[Project]:
        return self._resolve(self._by_owner.get(user_id, ()))

    def remove(self, project_id: str) -> Optional[Project]:
        project = self._by_id.pop(project_id, None)
        if project is not None:
            _index_discard(self._by_owner, project.user_id, project_id)
        return project

    def _resolve(self, ids: Iterable[str]) -> list[Project]:
        return [self._by_id[i] for i in ids]

    def __len__(self) -> int:
        return len(self._by_id)


class InMemoryTaskRepository:
    def __init__(self):
        self._by_id: dict[str, Task] = {}
        self._by_owner: dict[str, dict[str, None]] = {}
        self._by_project: dict[str, dict[str, None]] = {}

    def add(self, task: Task) -> None:
        self._by_id[task.id] = task
        _index_add(self._by_owner, task.user_id, task.id)
        if task.project_id:
            _index_add(self._by_project, task.project_id, task.id)

    def save(self, task: Task) -> None:
        previous = self._by_id.get(task.id)
        if previous is None:
            raise KeyError(task.id)
        if previous.project_id != task.project_id:
            if previous.project_id:
                _index_discard(self._by_project, previous.project_id, task.id)
            if task.project_id:
                _index_add(self._by_project, task.project_id, task.id)
        self._by_id[task.id] = task

    def get(self, task_id: str) -> Optional[Task]:
        return self._by_id.get(task_id)

    def list_by_owner(self, user_id: str) -> list[Task]:
        return [self._by_id[i] for i in self._by_owner.get(user_id, ())]

    def remove(self, task_id: str) -> Optional[Task]:
        task = self._by_id.pop(task_id, None)
        if task is None:
            return None
        _index_discard(self._by_owner, task.user_id, task_id)
        if task.project_id:
            _index_discard(self._by_project, task.project_id, task_id)
        return task

    def remove_by_project(self, project_id: str) -> list[Task]:
        """Remove every task attached to project_id, whoever owns it."""
        task_ids = list(self._by_project.get(project_id, ()))
        return [self.remove(task_id) for task_id in task_ids]

    def __len__(self) -> int:
        return len(self._by_id)
