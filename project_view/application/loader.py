"""Initial population of the workspace store."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from project_view.core.schema import Conversation, Document, Project
from project_view.domain import LoadFailure, Outcome, WorkspaceSnapshot
from project_view.infrastructure import Notifier, RemoteAccessFacade, RemotePayloadError

from .reporting import report_failure
from .store import WorkspaceStore

logger = logging.getLogger(__name__)


def _parse_list(model: type[Conversation] | type[Document], payload: Any, resource: str) -> tuple:
    if payload is None:
        return ()
    if not isinstance(payload, list):
        raise RemotePayloadError(f"Expected list of {resource}, got {type(payload).__name__}")
    return tuple(model.model_validate(item) for item in payload)


def _parse_settings(payload: Any) -> dict[str, Any] | None:
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise RemotePayloadError(f"Expected settings object, got {type(payload).__name__}")
    return dict(payload)


class WorkspaceLoader:
    """Fetches project, conversations, documents and settings together."""

    def __init__(self, project_id: str, remote: RemoteAccessFacade, store: WorkspaceStore, notifier: Notifier) -> None:
        self._project_id = project_id
        self._remote = remote
        self._store = store
        self._notifier = notifier

    async def load(self) -> Outcome[WorkspaceSnapshot]:
        self._store.begin_loading()
        base = f"/api/projects/{self._project_id}"

        # Every read settles before anything is decided.
        results = await asyncio.gather(
            self._remote.get(base),
            self._remote.get(f"{base}/chats"),
            self._remote.get(f"{base}/files"),
            self._remote.get(f"{base}/settings"),
            return_exceptions=True,
        )

        failures = [item for item in results if isinstance(item, BaseException)]
        for failure in failures:
            if not isinstance(failure, Exception):
                raise failure
        if failures:
            return self._fail(failures[0], f"{len(failures)} of 4 workspace reads failed")

        project_payload, conversations_payload, documents_payload, settings_payload = results
        try:
            snapshot = WorkspaceSnapshot(
                project=Project.model_validate(project_payload) if project_payload else None,
                conversations=_parse_list(Conversation, conversations_payload, "conversations"),
                documents=_parse_list(Document, documents_payload, "documents"),
                settings=_parse_settings(settings_payload),
            )
        except (ValidationError, RemotePayloadError) as exc:
            return self._fail(exc, "workspace payload was malformed")

        self._store.complete_load(snapshot)
        logger.info(
            "Loaded project %s: %d conversations, %d documents",
            self._project_id,
            len(snapshot.conversations),
            len(snapshot.documents),
        )
        return Outcome(value=snapshot)

    def _fail(self, cause: BaseException, detail: str) -> Outcome[WorkspaceSnapshot]:
        error = LoadFailure(f"Failed to load project {self._project_id}: {detail}")
        self._store.fail_load(error)
        return report_failure(self._notifier, error, cause, "Failed to fetch data")
