"""Application service layer for one active project view."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

from project_view.core.config import ClientConfig
from project_view.core.schema import Conversation, Document
from project_view.domain import BatchUploadResult, FileItem, Outcome, WorkspaceSnapshot
from project_view.infrastructure import IdentityProvider, LoggingNotifier, Notifier, RemoteAccessFacade
from project_view.workers.pipeline import IngestionPipeline

from .conversations import ConversationManager
from .documents import DocumentLifecycleManager
from .loader import WorkspaceLoader
from .settings import SettingsController
from .store import WorkspaceStore


class WorkspaceSession:
    """Owns the store for one project and wires every component to it."""

    def __init__(
        self,
        project_id: str,
        remote: RemoteAccessFacade,
        *,
        notifier: Notifier | None = None,
        title_prefix: str = "Chat",
    ) -> None:
        self.project_id = project_id
        self.remote = remote
        self.notifier = notifier or LoggingNotifier()
        self.store = WorkspaceStore()

        self.loader = WorkspaceLoader(project_id, remote, self.store, self.notifier)
        self.conversations = ConversationManager(
            project_id, remote, self.store, self.notifier, title_prefix=title_prefix
        )
        self.documents = DocumentLifecycleManager(project_id, remote, self.store, self.notifier)
        self.uploads = IngestionPipeline(project_id, remote, self.store, self.notifier)
        self.settings = SettingsController(project_id, remote, self.store, self.notifier)

    @classmethod
    def from_config(
        cls,
        project_id: str,
        config: ClientConfig,
        identity: IdentityProvider,
        *,
        notifier: Notifier | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> "WorkspaceSession":
        remote = RemoteAccessFacade(
            identity,
            api_base=config.api_base,
            timeout=config.timeout,
            upload_timeout=config.upload_timeout,
            http_client=http_client,
        )
        return cls(project_id, remote, notifier=notifier, title_prefix=config.title_prefix)

    @property
    def snapshot(self) -> WorkspaceSnapshot:
        return self.store.snapshot

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    async def activate(self) -> Outcome[WorkspaceSnapshot]:
        return await self.loader.load()

    async def close(self) -> None:
        self.store.close()
        await self.remote.close()

    # ------------------------------------------------------------------
    # mutators
    # ------------------------------------------------------------------
    async def create_conversation(self) -> Outcome[Conversation]:
        return await self.conversations.create()

    async def delete_conversation(self, conversation_id: str) -> Outcome[str]:
        return await self.conversations.delete(conversation_id)

    async def upload_documents(self, files: Sequence[FileItem]) -> BatchUploadResult:
        return await self.uploads.upload(files)

    async def delete_document(self, document_id: str) -> Outcome[str]:
        return await self.documents.delete(document_id)

    async def add_document_from_url(self, url: str) -> Outcome[Document]:
        return await self.documents.add_from_url(url)

    def draft_settings(self, updates: Mapping[str, Any]) -> bool:
        return self.settings.draft(updates)

    async def publish_settings(self) -> Outcome[dict[str, Any]]:
        return await self.settings.publish()
