"""Service-layer tests — ownership, cascade, and patch rules without HTTP."""

import threading
from datetime import datetime, timezone

import pytest

from tasktrack.db.store import Store
from tasktrack.errors import (
    DuplicateEmail,
    Forbidden,
    InvalidCredentials,
    InvalidReference,
    NotFound,
    ValidationError,
)
from tasktrack.services.project_service import ProjectService
from tasktrack.services.task_service import TaskService
from tasktrack.services.user_service import UserService, normalize_email


@pytest.fixture
def svc():
    s = Store()
    return UserService(s), ProjectService(s), TaskService(s)


# ─── Users ───────────────────────────────────────────────


def test_normalize_email():
    assert normalize_email(" T@X.com ") == "t@x.com"
    assert normalize_email("a b@ex ample.com") == "ab@example.com"


def test_register_and_authenticate(svc):
    users, _, _ = svc
    user = users.register("Ann", "Ann@Example.com", "pw")
    assert user.email == "ann@example.com"
    assert user.password_hash != "pw"
    assert users.authenticate("ann@example.com ", "pw").id == user.id


def test_register_duplicate(svc):
    users, _, _ = svc
    users.register("Ann", "ann@example.com", "pw")
    with pytest.raises(DuplicateEmail):
        users.register("Ann 2", "ANN@example.com", "pw2")


def test_authenticate_failures_share_one_error(svc):
    users, _, _ = svc
    users.register("Ann", "ann@example.com", "pw")
    with pytest.raises(InvalidCredentials) as wrong:
        users.authenticate("ann@example.com", "nope")
    with pytest.raises(InvalidCredentials) as unknown:
        users.authenticate("bob@example.com", "pw")
    assert wrong.value.message == unknown.value.message


# ─── Projects ────────────────────────────────────────────


def test_create_project_validation(svc):
    _, projects, _ = svc
    with pytest.raises(ValidationError):
        projects.create_project("u", None)
    with pytest.raises(ValidationError):
        projects.create_project("u", "")


def test_update_project_scoped_to_owner(svc):
    _, projects, _ = svc
    p = projects.create_project("u", "P")
    with pytest.raises(NotFound):
        projects.update_project("v", p.id, name="X")
    assert projects.list_projects("u")[0].name == "P"


def test_update_project_always_refreshes_updated_at(svc):
    _, projects, _ = svc
    p = projects.create_project("u", "P", "d")
    updated = projects.update_project("u", p.id)
    assert updated.name == "P"
    assert updated.description == "d"
    assert updated.updated_at > p.updated_at
    assert updated.created_at == p.created_at


def test_rejected_update_leaves_store_untouched(svc):
    _, projects, _ = svc
    p = projects.create_project("u", "P")
    with pytest.raises(NotFound):
        projects.update_project("v", p.id, name="X")
    assert projects.list_projects("u")[0].updated_at == p.updated_at


def test_delete_project_cascade(svc):
    _, projects, tasks = svc
    p = projects.create_project("u", "P")
    other = projects.create_project("u", "Other")
    tasks.create_task("u", "a", project_id=p.id)
    tasks.create_task("u", "b", project_id=p.id)
    survivor = tasks.create_task("u", "c", project_id=other.id)

    projects.delete_project("u", p.id)
    assert [t.id for t in tasks.list_tasks("u")] == [survivor.id]
    assert [x.id for x in projects.list_projects("u")] == [other.id]


def test_delete_project_of_other_owner(svc):
    _, projects, tasks = svc
    p = projects.create_project("u", "P")
    tasks.create_task("u", "a", project_id=p.id)
    with pytest.raises(NotFound):
        projects.delete_project("v", p.id)
    assert len(tasks.list_tasks("u")) == 1


# ─── Tasks ───────────────────────────────────────────────


def test_create_task_defaults(svc):
    _, _, tasks = svc
    before = datetime.now(timezone.utc)
    t = tasks.create_task("u", "t")
    assert (t.description, t.tags, t.status, t.priority) == ("", [], "pending", "medium")
    assert t.project_id is None
    assert t.due >= before
    assert t.created_at == t.updated_at


def test_create_task_project_reference(svc):
    _, projects, tasks = svc
    p = projects.create_project("u", "P")
    with pytest.raises(InvalidReference):
        tasks.create_task("v", "t", project_id=p.id)
    with pytest.raises(InvalidReference):
        tasks.create_task("u", "t", project_id="missing")
    assert tasks.create_task("u", "t", project_id=p.id).project_id == p.id


def test_create_task_copies_tags(svc):
    _, _, tasks = svc
    tags = ["a"]
    t = tasks.create_task("u", "t", tags=tags)
    tags.append("b")
    assert t.tags == ["a"]


def test_patch_task_rules(svc):
    _, _, tasks = svc
    t = tasks.create_task("u", "t", description="d")
    with pytest.raises(NotFound):
        tasks.patch_task("u", "missing", {})
    with pytest.raises(Forbidden):
        tasks.patch_task("v", t.id, {"name": "x"})

    patched = tasks.patch_task("u", t.id, {"description": "", "bogus": 1})
    assert patched.description == ""
    assert patched.name == "t"
    assert patched.updated_at > t.updated_at


def test_delete_task_scoped(svc):
    _, _, tasks = svc
    t = tasks.create_task("u", "t")
    with pytest.raises(NotFound):
        tasks.delete_task("v", t.id)
    tasks.delete_task("u", t.id)
    assert tasks.list_tasks("u") == []


def test_concurrent_creates_are_all_kept(svc):
    _, _, tasks = svc

    def worker(n):
        for i in range(50):
            tasks.create_task("u", f"{n}-{i}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()
    assert len(tasks.list_tasks("u")) == 200
