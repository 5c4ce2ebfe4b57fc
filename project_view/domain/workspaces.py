"""Domain entities for the single-project workspace view."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from project_view.core.schema import Conversation, Document, Project


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class WorkspaceSnapshot:
    """Aggregated view of one project; replaced, never mutated in place."""

    project: Project | None = None
    conversations: tuple[Conversation, ...] = ()
    documents: tuple[Document, ...] = ()
    settings: dict[str, Any] | None = None

    @property
    def ready(self) -> bool:
        return self.project is not None

    def find_conversation(self, conversation_id: str) -> Conversation | None:
        return next((item for item in self.conversations if item.id == conversation_id), None)

    def find_document(self, document_id: str) -> Document | None:
        return next((item for item in self.documents if item.id == document_id), None)


@dataclass(frozen=True, slots=True)
class SettingsState:
    """Last server-confirmed settings alongside the local working copy."""

    published: dict[str, Any] | None = None
    draft: dict[str, Any] | None = field(default=None)

    @property
    def loaded(self) -> bool:
        return self.draft is not None

    @property
    def dirty(self) -> bool:
        return self.draft != self.published
