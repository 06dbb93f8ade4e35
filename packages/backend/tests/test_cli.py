"""CLI tests — click commands driven against the app in-process.

Learn: The CLI only talks HTTP. Swapping its client factory for one
bound to an ASGITransport exercises every command against the real app
(and the per-test store) without starting a server.
"""

import httpx
import pytest
from click.testing import CliRunner
from httpx import ASGITransport

from tasktrack.cli import main as cli_main
from tasktrack.main import app


@pytest.fixture
def runner(store, monkeypatch):
    def in_process_client(token=None):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        return httpx.AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test", headers=headers
        )

    monkeypatch.setattr(cli_main, "_client", in_process_client)
    monkeypatch.delenv("TASKTRACK_TOKEN", raising=False)
    return CliRunner()


def _register(runner, email="cli@example.com") -> str:
    result = runner.invoke(
        cli_main.main, ["register", "Cli User", email, "--password", "pw12345"]
    )
    assert result.exit_code == 0, result.output
    return result.output.strip().splitlines()[-1]


def test_health(runner):
    result = runner.invoke(cli_main.main, ["health"])
    assert result.exit_code == 0
    assert "ok" in result.output


def test_register_then_login(runner, store):
    _register(runner)
    result = runner.invoke(
        cli_main.main, ["login", "CLI@example.com", "--password", "pw12345"]
    )
    assert result.exit_code == 0, result.output
    token = result.output.strip().splitlines()[-1]
    assert token.count(".") == 2  # header.payload.signature
    assert store.users.get_by_email("cli@example.com") is not None


def test_login_failure_prints_api_error(runner):
    result = runner.invoke(
        cli_main.main, ["login", "nobody@example.com", "--password", "x"]
    )
    assert result.exit_code == 1
    assert "Invalid email or password" in result.output


def test_protected_command_needs_token(runner):
    result = runner.invoke(cli_main.main, ["projects"])
    assert result.exit_code == 1
    assert "TASKTRACK_TOKEN" in result.output


def test_project_and_task_workflow(runner, store):
    token = _register(runner)
    auth = ["--token", token]

    result = runner.invoke(
        cli_main.main, ["project-create", "Website", "-d", "marketing site", *auth]
    )
    assert result.exit_code == 0, result.output
    assert "Website" in result.output
    [project] = store.projects.list_by_owner(store.users.get_by_email("cli@example.com").id)

    result = runner.invoke(
        cli_main.main,
        ["task-create", "write copy", "--project-id", project.id, "--tag", "docs", *auth],
    )
    assert result.exit_code == 0, result.output
    [task] = store.tasks.list_by_owner(project.user_id)
    assert task.tags == ["docs"]

    result = runner.invoke(cli_main.main, ["task-status", task.id, "done", *auth])
    assert result.exit_code == 0, result.output
    assert "done" in result.output

    result = runner.invoke(cli_main.main, ["tasks", "--search", "COPY", *auth])
    assert result.exit_code == 0
    assert "write copy" in result.output
    assert "1 task(s)" in result.output

    result = runner.invoke(cli_main.main, ["projects", *auth])
    assert "Website" in result.output

    result = runner.invoke(cli_main.main, ["project-delete", project.id, *auth])
    assert result.exit_code == 0
    assert "Project deleted successfully" in result.output

    result = runner.invoke(cli_main.main, ["tasks", *auth])
    assert "No tasks." in result.output


def test_token_from_environment(runner, monkeypatch):
    token = _register(runner)
    monkeypatch.setenv("TASKTRACK_TOKEN", token)
    result = runner.invoke(cli_main.main, ["projects", "--json"])
    assert result.exit_code == 0, result.output
    assert '"total": 0' in result.output


def test_task_delete_unknown_id(runner):
    token = _register(runner)
    result = runner.invoke(cli_main.main, ["task-delete", "missing", "--token", token])
    assert result.exit_code == 1
    assert "Task not found" in result.output
