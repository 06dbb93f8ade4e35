"""Process-wide store and its FastAPI dependency.

Learn: The Store plays the role a database engine plays elsewhere:
created once at import, handed to each request through get_store(),
swapped for a fresh instance in tests via dependency_overrides.

One RLock guards all three repositories. Services hold it for the whole
of each operation, so "find then delete" and "delete project then its
tasks" are never interleaved with another request.
"""

import threading
from typing import Optional

from tasktrack.db.repositories import (
    InMemoryProjectRepository,
    InMemoryTaskRepository,
    InMemoryUserRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)


class Store:
    """Bundle of repositories sharing one exclusive lock."""

    def __init__(
        self,
        users: Optional[UserRepository] = None,
        projects: Optional[ProjectRepository] = None,
        tasks: Optional[TaskRepository] = None,
    ):
        self.users = users if users is not None else InMemoryUserRepository()
        self.projects = projects if projects is not None else InMemoryProjectRepository()
        self.tasks = tasks if tasks is not None else InMemoryTaskRepository()
        self.lock = threading.RLock()


store = Store()


def get_store() -> Store:
    """FastAPI dependency — the process-wide store."""
    return store
