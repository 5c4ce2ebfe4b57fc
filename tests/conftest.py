"""Shared fake backend for workspace view tests.

The fake answers every backend and object-storage request through
``httpx.MockTransport`` so sessions run against real HTTP plumbing without a
network.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from project_view.application import WorkspaceSession
from project_view.infrastructure import QueuedNotifier, RemoteAccessFacade, StaticIdentity

API_BASE = "http://backend.test"
STORAGE_HOST = "storage.test"


class FakeBackend:
    def __init__(self, project_id: str = "p1") -> None:
        self.project_id = project_id
        self.project: dict[str, Any] | None = {"id": project_id, "name": "Demo project"}
        self.conversations: list[dict[str, Any]] = [
            {"id": "c2", "title": "Chat #2", "project_id": project_id},
            {"id": "c1", "title": "Chat #1", "project_id": project_id},
        ]
        self.documents: list[dict[str, Any]] = []
        self.settings: dict[str, Any] | None = {"tone": "formal"}
        self.settings_echo: dict[str, Any] = {}
        self.requests: list[tuple[str, str]] = []
        self.bodies: list[Any] = []
        self.storage: dict[str, bytes] = {}
        self._failures: dict[tuple[str, str], int] = {}
        self._upload_failures: dict[str, tuple[str, int]] = {}
        self._counter = 0

    # ------------------------------------------------------------------
    # failure injection
    # ------------------------------------------------------------------
    def fail(self, method: str, path: str, status: int = 500) -> None:
        """Make ``method path`` answer ``status``; ``0`` means a network error."""

        self._failures[(method, path)] = status

    def fail_upload(self, filename: str, stage: str, status: int = 500) -> None:
        self._upload_failures[filename] = (stage, status)

    def clear_failures(self) -> None:
        self._failures.clear()
        self._upload_failures.clear()

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------
    def _error(self, request: httpx.Request, status: int) -> httpx.Response:
        if status == 0:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(status, json={"detail": "injected failure"})

    def _upload_failure(self, request: httpx.Request, filename: str, stage: str) -> httpx.Response | None:
        failing = self._upload_failures.get(filename)
        if failing and failing[0] == stage:
            return self._error(request, failing[1])
        return None

    def _next_id(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.requests.append((method, path))
        body: Any = None
        if request.content and request.url.host != STORAGE_HOST:
            body = json.loads(request.content)
        self.bodies.append(body)

        if (method, path) in self._failures:
            return self._error(request, self._failures[(method, path)])

        if request.url.host == STORAGE_HOST:
            key = path.removeprefix("/bucket/")
            failed = self._upload_failure(request, key.rsplit("/", 1)[-1], "transfer")
            if failed is not None:
                return failed
            self.storage[key] = request.content
            return httpx.Response(200)

        if request.headers.get("Authorization") != "Bearer token-1":
            return httpx.Response(401, json={"detail": "unauthorised"})

        base = f"/api/projects/{self.project_id}"
        if method == "GET" and path == base:
            return httpx.Response(200, json=self.project)
        if method == "GET" and path == f"{base}/chats":
            return httpx.Response(200, json=self.conversations)
        if method == "GET" and path == f"{base}/files":
            return httpx.Response(200, json={"data": self.documents})
        if method == "GET" and path == f"{base}/settings":
            return httpx.Response(200, json=self.settings)
        if method == "PUT" and path == f"{base}/settings":
            self.settings = {**body, **self.settings_echo}
            return httpx.Response(200, json=self.settings)
        if method == "POST" and path == "/api/chats":
            conversation = {
                "id": self._next_id("c-new-"),
                "title": body["title"].upper(),
                "project_id": body["project_id"],
            }
            self.conversations.insert(0, conversation)
            return httpx.Response(201, json=conversation)
        if method == "DELETE" and path.startswith("/api/chats/"):
            return httpx.Response(204)
        if method == "POST" and path == f"{base}/files/upload-url":
            failed = self._upload_failure(request, body["filename"], "reserve")
            if failed is not None:
                return failed
            key = f"uploads/{body['filename']}"
            return httpx.Response(
                200,
                json={"upload_url": f"https://{STORAGE_HOST}/bucket/{key}?signature=abc", "s3_key": key},
            )
        if method == "POST" and path == f"{base}/files/confirm":
            filename = body["s3_key"].rsplit("/", 1)[-1]
            failed = self._upload_failure(request, filename, "confirm")
            if failed is not None:
                return failed
            document = {
                "id": f"d-{filename}",
                "filename": filename,
                "source_type": "file",
                "processing_status": "queued",
                "s3_key": body["s3_key"],
                "file_size": len(self.storage.get(body["s3_key"], b"")),
            }
            self.documents.insert(0, document)
            return httpx.Response(200, json=document)
        if method == "DELETE" and path.startswith(f"{base}/files/"):
            return httpx.Response(204)
        if method == "POST" and path == f"{base}/urls":
            document = {"id": self._next_id("u-"), "source_type": "url", "source_url": body["url"]}
            return httpx.Response(200, json=document)
        return httpx.Response(404, json={"detail": "not found"})

    def count(self, method: str, path_prefix: str = "") -> int:
        return sum(1 for m, p in self.requests if m == method and p.startswith(path_prefix))


def build_session(backend: FakeBackend, *, token: str | None = "token-1", handler=None) -> WorkspaceSession:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler or backend.handler))
    remote = RemoteAccessFacade(StaticIdentity(token=token, user_id="u1"), api_base=API_BASE, http_client=http_client)
    return WorkspaceSession(backend.project_id, remote, notifier=QueuedNotifier())


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def session(backend) -> WorkspaceSession:
    return build_session(backend)


def messages(session: WorkspaceSession, level: str | None = None) -> list[str]:
    return [item.message for item in session.notifier.peek() if level is None or item.level == level]
