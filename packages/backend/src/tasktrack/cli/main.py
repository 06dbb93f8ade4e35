"""tasktrack CLI — run the server, manage your projects and tasks.

Usage:
    tasktrack serve --port 3000                   # Run the API with uvicorn
    tasktrack health                              # Ping /healthz
    tasktrack register "Ada" ada@example.com -p secret
    tasktrack login ada@example.com -p secret     # Prints a token
    export TASKTRACK_TOKEN=...                    # Used by the commands below
    tasktrack projects --search api               # List projects
    tasktrack project-create "API" -d "backend"   # Create a project
    tasktrack tasks                               # List tasks
    tasktrack task-create "write docs" --project-id <id> --tag docs
    tasktrack task-status <id> done               # PATCH a task's status
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys
from typing import Optional

import click
import httpx

from tasktrack import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:3000"


def _api_url() -> str:
    return os.environ.get("TASKTRACK_API_URL", DEFAULT_API_URL).rstrip("/")


def _client(token: Optional[str] = None) -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the tasktrack API."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return httpx.AsyncClient(base_url=_api_url(), headers=headers, timeout=30.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous click handler.

    Falls back to a worker thread when an event loop is already running
    (e.g. CliRunner invoked from inside an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


def _require_token(token: Optional[str]) -> str:
    if not token:
        click.secho(
            "Error: --token required (or set TASKTRACK_TOKEN env var)",
            fg="red",
            err=True,
        )
        sys.exit(1)
    return token


def _check(r: httpx.Response) -> dict:
    """Return the JSON body, or print the API's error message and exit 1."""
    if r.is_success:
        return r.json()
    try:
        message = r.json().get("error", r.text)
    except ValueError:
        message = r.text
    click.secho(f"Error ({r.status_code}): {message}", fg="red", err=True)
    sys.exit(1)


def _pretty_json(data: dict | list) -> str:
    return json.dumps(data, indent=2, default=str)


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(_cell(row.get(k)).ljust(w)[:w] for _, k, w in columns)
        click.echo(line)


def _cell(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, list):
        return ",".join(str(v) for v in value)
    return str(value)


def _status_color(status: str) -> str:
    colors = {
        "pending": "yellow",
        "todo": "white",
        "in_progress": "cyan",
        "done": "green",
        "cancelled": "red",
    }
    return colors.get(status, "white")


token_option = click.option(
    "--token", envvar="TASKTRACK_TOKEN", help="Bearer token (or set TASKTRACK_TOKEN)"
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="tasktrack")
def main():
    """tasktrack — per-user projects and tasks."""


# ---------------------------------------------------------------------------
# tasktrack serve / health
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: settings.host)")
@click.option("--port", type=int, default=None, help="Port (default: settings.port)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server with uvicorn."""
    import uvicorn

    from tasktrack.config import settings

    uvicorn.run(
        "tasktrack.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@main.command()
def health():
    """Check that the API is up."""
    try:
        r = _run(_request("GET", "/healthz"))
    except httpx.ConnectError:
        click.secho(f"API not reachable at {_api_url()}", fg="red", err=True)
        sys.exit(1)
    body = _check(r)
    click.secho(f"API {_api_url()}: {body['status']}", fg="green")


# ---------------------------------------------------------------------------
# tasktrack register / login
# ---------------------------------------------------------------------------


@main.command()
@click.argument("name")
@click.argument("email")
@click.option("--password", "-p", prompt=True, hide_input=True,
              confirmation_prompt=True, help="Account password")
def register(name: str, email: str, password: str):
    """Create an account and print its token."""
    body = _check(_run(_request("POST", "/auth/register", json={
        "name": name, "email": email, "password": password,
    })))
    click.secho(f"Registered {body['email']} ({body['id']})", fg="green", err=True)
    click.echo(body["token"])


@main.command()
@click.argument("email")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Account password")
def login(email: str, password: str):
    """Log in and print a token (valid for one hour)."""
    body = _check(_run(_request("POST", "/auth/login", json={"email": email, "password": password})))
    click.echo(body["token"])


# ---------------------------------------------------------------------------
# tasktrack projects
# ---------------------------------------------------------------------------


@main.command()
@click.option("--search", "-s", default=None, help="Filter by name")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@token_option
def projects(search: Optional[str], as_json: bool, token: Optional[str]):
    """List your projects."""
    body = _check(_run(_request(
        "GET", "/projects", _require_token(token), params=_search_params(search)
    )))
    if as_json:
        click.echo(_pretty_json(body))
        return
    if not body["projects"]:
        click.echo("No projects.")
        return
    _print_table(body["projects"], [
        ("ID", "id", 36),
        ("NAME", "name", 30),
        ("DESCRIPTION", "description", 40),
    ])
    click.echo(f"\n{body['total']} project(s)")


@main.command("project-create")
@click.argument("name")
@click.option("--description", "-d", default=None, help="Project description")
@token_option
def project_create(name: str, description: Optional[str], token: Optional[str]):
    """Create a project."""
    payload = {"name": name}
    if description is not None:
        payload["description"] = description
    body = _check(_run(_request("POST", "/projects", _require_token(token), json=payload)))
    click.secho(f"Project created: {body['name']} ({body['id']})", fg="green")


@main.command("project-delete")
@click.argument("project_id")
@token_option
def project_delete(project_id: str, token: Optional[str]):
    """Delete a project and all of its tasks."""
    body = _check(_run(_request("DELETE", f"/projects/{project_id}", _require_token(token))))
    click.secho(body["message"], fg="green")


# ---------------------------------------------------------------------------
# tasktrack tasks
# ---------------------------------------------------------------------------


@main.command()
@click.option("--search", "-s", default=None, help="Filter by name")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
@token_option
def tasks(search: Optional[str], as_json: bool, token: Optional[str]):
    """List your tasks."""
    body = _check(_run(_request(
        "GET", "/tasks", _require_token(token), params=_search_params(search)
    )))
    if as_json:
        click.echo(_pretty_json(body))
        return
    if not body["tasks"]:
        click.echo("No tasks.")
        return
    click.secho(f"{'ID':36s}  {'STATUS':12s}  {'PRIORITY':8s}  NAME", bold=True)
    for t in body["tasks"]:
        status_str = click.style(f"{t['status']:12s}", fg=_status_color(t["status"]))
        click.echo(f"{t['id']:36s}  {status_str}  {t['priority']:8s}  {t['name'][:50]}")
    click.echo(f"\n{body['total']} task(s)")


@main.command("task-create")
@click.argument("name")
@click.option("--project-id", default=None, help="Attach to one of your projects")
@click.option("--description", "-d", default=None)
@click.option("--status", default=None, help="Initial status (default: pending)")
@click.option("--priority", default=None, help="Priority (default: medium)")
@click.option("--due", default=None, help="Due date, ISO-8601")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@token_option
def task_create(name: str, project_id: Optional[str], description: Optional[str],
                status: Optional[str], priority: Optional[str], due: Optional[str],
                tags: tuple[str, ...], token: Optional[str]):
    """Create a task."""
    payload: dict = {"name": name}
    optional = {
        "projectId": project_id,
        "description": description,
        "status": status,
        "priority": priority,
        "due": due,
    }
    payload.update({k: v for k, v in optional.items() if v is not None})
    if tags:
        payload["tags"] = list(tags)
    body = _check(_run(_request("POST", "/tasks", _require_token(token), json=payload)))
    click.secho(f"Task created: {body['name']} ({body['id']})", fg="green")


@main.command("task-status")
@click.argument("task_id")
@click.argument("status")
@token_option
def task_status(task_id: str, status: str, token: Optional[str]):
    """Set a task's status."""
    body = _check(_run(_request(
        "PATCH", f"/tasks/{task_id}", _require_token(token), json={"status": status}
    )))
    click.echo(f"{body['name']}: {click.style(body['status'], fg=_status_color(body['status']))}")


@main.command("task-delete")
@click.argument("task_id")
@token_option
def task_delete(task_id: str, token: Optional[str]):
    """Delete a task."""
    body = _check(_run(_request("DELETE", f"/tasks/{task_id}", _require_token(token))))
    click.secho(body["message"], fg="green")


# ---------------------------------------------------------------------------
# HTTP helpers
# ---------------------------------------------------------------------------


def _search_params(search: Optional[str]) -> Optional[dict]:
    return {"search": search} if search else None


async def _request(method: str, path: str, token: Optional[str] = None,
                   **kwargs) -> httpx.Response:
    async with _client(token) as c:
        return await c.request(method, path, **kwargs)


if __name__ == "__main__":
    main()
