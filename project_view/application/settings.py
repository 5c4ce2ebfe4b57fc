from __future__ import annotations

import logging
from typing import Any, Mapping

from project_view.domain import MutationFailure, Outcome, PreconditionFailure
from project_view.infrastructure import Notifier, RemoteAccessError, RemoteAccessFacade, RemotePayloadError

from .reporting import report_failure
from .store import WorkspaceStore

logger = logging.getLogger(__name__)


class SettingsController:
    """Local drafts of the project settings and their explicit publication.

    ``draft`` only touches the working copy.  ``publish`` sends the whole
    working copy and, on success, adopts the server's answer as both the
    working copy and the published baseline.  A failed publish leaves the
    working copy exactly as it was.
    """

    def __init__(self, project_id: str, remote: RemoteAccessFacade, store: WorkspaceStore, notifier: Notifier) -> None:
        self._project_id = project_id
        self._remote = remote
        self._store = store
        self._notifier = notifier

    @property
    def is_dirty(self) -> bool:
        return self._store.settings_state.dirty

    def draft(self, updates: Mapping[str, Any]) -> bool:
        return self._store.draft_settings(updates)

    async def publish(self) -> Outcome[dict[str, Any]]:
        draft = self._store.settings_state.draft
        if draft is None:
            error = PreconditionFailure("Cannot publish settings before they are loaded")
            return report_failure(self._notifier, error, None, "Cannot save settings")

        try:
            payload = await self._remote.put(f"/api/projects/{self._project_id}/settings", dict(draft))
            if not isinstance(payload, dict):
                raise RemotePayloadError(f"Expected settings object, got {type(payload).__name__}")
        except RemoteAccessError as exc:
            error = MutationFailure("publish_settings")
            return report_failure(self._notifier, error, exc, "Failed to save settings!")

        self._store.confirm_settings(payload)
        logger.info("Published settings for project %s", self._project_id)
        self._notifier.success("Settings saved successfully!")
        return Outcome(value=dict(payload))
