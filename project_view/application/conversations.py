from __future__ import annotations

import logging

from pydantic import ValidationError

from project_view.core.merges import prepend_conversation, remove_conversation
from project_view.core.naming import default_conversation_title
from project_view.core.schema import Conversation
from project_view.domain import MutationFailure, Outcome
from project_view.infrastructure import Notifier, RemoteAccessError, RemoteAccessFacade

from .reporting import report_failure
from .store import WorkspaceStore

logger = logging.getLogger(__name__)


class ConversationManager:
    """Creates and deletes conversations, reconciling results into the store.

    Calls are not serialised: concurrent mutations land in the order their
    remote calls resolve.
    """

    def __init__(
        self,
        project_id: str,
        remote: RemoteAccessFacade,
        store: WorkspaceStore,
        notifier: Notifier,
        *,
        title_prefix: str = "Chat",
    ) -> None:
        self._project_id = project_id
        self._remote = remote
        self._store = store
        self._notifier = notifier
        self._title_prefix = title_prefix

    async def create(self) -> Outcome[Conversation]:
        title = default_conversation_title(self._title_prefix)
        self._store.track_create(1)
        try:
            payload = await self._remote.post("/api/chats", {"title": title, "project_id": self._project_id})
            conversation = Conversation.model_validate(payload)
        except (RemoteAccessError, ValidationError) as exc:
            error = MutationFailure("create_conversation")
            return report_failure(self._notifier, error, exc, "Failed to create chat")
        finally:
            self._store.track_create(-1)

        self._store.apply(prepend_conversation, conversation)
        logger.info("Created conversation %s (%s)", conversation.id, conversation.title)
        self._notifier.success("Chat created successfully")
        return Outcome(value=conversation)

    async def delete(self, conversation_id: str) -> Outcome[str]:
        try:
            await self._remote.delete(f"/api/chats/{conversation_id}")
        except RemoteAccessError as exc:
            error = MutationFailure("delete_conversation")
            return report_failure(self._notifier, error, exc, "Failed to delete chat")

        self._store.apply(remove_conversation, conversation_id)
        logger.info("Deleted conversation %s", conversation_id)
        self._notifier.success("Chat deleted successfully")
        return Outcome(value=conversation_id)
