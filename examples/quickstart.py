#!/usr/bin/env python3
"""
tasktrack Quickstart — full lifecycle in one script.

Registers a user → creates a project → adds tasks → patches one →
deletes the project (its tasks go with it).
Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running: tasktrack serve (http://localhost:3000)
"""

import sys
import uuid

import httpx

BASE = "http://localhost:3000"


def main():
    run_id = uuid.uuid4().hex[:6]
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/healthz")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        sys.exit(1)
    print(f"  Status: {resp.json()['status']}")

    # ── Register ──────────────────────────────────────────────────
    print("\n1. Registering user...")
    resp = client.post("/auth/register", json={
        "name": f"Demo {run_id}",
        "email": f"demo-{run_id}@example.com",
        "password": "demo-password-123",
    })
    assert resp.status_code == 201, f"Failed: {resp.text}"
    user = resp.json()
    client.headers["Authorization"] = f"Bearer {user['token']}"
    print(f"   User: {user['email']} ({user['id'][:8]}...)")

    # ── Create project ────────────────────────────────────────────
    print("\n2. Creating project...")
    resp = client.post("/projects", json={"name": "Website", "description": "Relaunch"})
    assert resp.status_code == 201, f"Failed: {resp.text}"
    project = resp.json()
    print(f"   Project: {project['name']} ({project['id'][:8]}...)")

    # ── Create tasks ──────────────────────────────────────────────
    print("\n3. Creating tasks...")
    tasks = []
    for name, priority in [("Write copy", "high"), ("Pick fonts", "low")]:
        resp = client.post("/tasks", json={
            "name": name,
            "projectId": project["id"],
            "priority": priority,
            "tags": ["website"],
        })
        assert resp.status_code == 201, f"Failed: {resp.text}"
        tasks.append(resp.json())
        print(f"   Task: {name} [{priority}]")

    # ── Patch one ─────────────────────────────────────────────────
    print("\n4. Marking first task done...")
    resp = client.patch(f"/tasks/{tasks[0]['id']}", json={"status": "done"})
    assert resp.status_code == 200, f"Failed: {resp.text}"
    print(f"   {resp.json()['name']}: {resp.json()['status']}")

    # ── Search ────────────────────────────────────────────────────
    resp = client.get("/tasks", params={"search": "copy"})
    print(f"\n5. Search 'copy': {resp.json()['total']} match(es)")

    # ── Delete project (cascade) ──────────────────────────────────
    print("\n6. Deleting project...")
    resp = client.delete(f"/projects/{project['id']}")
    print(f"   {resp.json()['message']}")
    resp = client.get("/tasks")
    print(f"   Tasks left: {resp.json()['total']}")


if __name__ == "__main__":
    main()
