from __future__ import annotations

import logging

from pydantic import ValidationError

from project_view.core.merges import prepend_documents, remove_document
from project_view.core.schema import Document
from project_view.domain import MutationFailure, Outcome, PreconditionFailure
from project_view.infrastructure import Notifier, RemoteAccessError, RemoteAccessFacade

from .reporting import report_failure
from .store import WorkspaceStore

logger = logging.getLogger(__name__)


class DocumentLifecycleManager:
    """Deletes documents and adds url-sourced ones."""

    def __init__(self, project_id: str, remote: RemoteAccessFacade, store: WorkspaceStore, notifier: Notifier) -> None:
        self._project_id = project_id
        self._remote = remote
        self._store = store
        self._notifier = notifier

    async def delete(self, document_id: str) -> Outcome[str]:
        try:
            await self._remote.delete(f"/api/projects/{self._project_id}/files/{document_id}")
        except RemoteAccessError as exc:
            error = MutationFailure("delete_document")
            return report_failure(self._notifier, error, exc, "Document deletion failed")

        self._store.apply(remove_document, document_id)
        logger.info("Deleted document %s", document_id)
        self._notifier.success("Document deleted successfully!")
        return Outcome(value=document_id)

    async def add_from_url(self, url: str) -> Outcome[Document]:
        url = (url or "").strip()
        if not url:
            error = PreconditionFailure("A url is required to add a website")
            return report_failure(self._notifier, error, None, "Failed to add website")

        try:
            payload = await self._remote.post(f"/api/projects/{self._project_id}/urls", {"url": url})
            document = Document.model_validate(payload)
        except (RemoteAccessError, ValidationError) as exc:
            error = MutationFailure("add_document_from_url")
            return report_failure(self._notifier, error, exc, "Failed to add website")

        self._store.apply(prepend_documents, [document])
        logger.info("Added url document %s from %s", document.id, url)
        self._notifier.success("Website added successfully!")
        return Outcome(value=document)
