"""Pure merge functions producing a new snapshot from the previous one."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, Mapping, Sequence, TypeVar

from project_view.core.schema import Conversation, Document
from project_view.domain.workspaces import WorkspaceSnapshot

_T = TypeVar("_T", Conversation, Document)


def _prepend_unique(existing: Sequence[_T], incoming: Iterable[_T]) -> tuple[_T, ...]:
    """Place ``incoming`` first, dropping any older entry sharing an id."""

    head: list[_T] = []
    seen: set[str] = set()
    for item in incoming:
        if item.id in seen:
            continue
        seen.add(item.id)
        head.append(item)
    tail = [item for item in existing if item.id not in seen]
    return tuple(head + tail)


def _without(existing: Sequence[_T], item_id: str) -> tuple[_T, ...]:
    return tuple(item for item in existing if item.id != item_id)


def prepend_conversation(snapshot: WorkspaceSnapshot, conversation: Conversation) -> WorkspaceSnapshot:
    return replace(snapshot, conversations=_prepend_unique(snapshot.conversations, [conversation]))


def remove_conversation(snapshot: WorkspaceSnapshot, conversation_id: str) -> WorkspaceSnapshot:
    if snapshot.find_conversation(conversation_id) is None:
        return snapshot
    return replace(snapshot, conversations=_without(snapshot.conversations, conversation_id))


def prepend_documents(snapshot: WorkspaceSnapshot, documents: Iterable[Document]) -> WorkspaceSnapshot:
    documents = list(documents)
    if not documents:
        return snapshot
    return replace(snapshot, documents=_prepend_unique(snapshot.documents, documents))


def remove_document(snapshot: WorkspaceSnapshot, document_id: str) -> WorkspaceSnapshot:
    if snapshot.find_document(document_id) is None:
        return snapshot
    return replace(snapshot, documents=_without(snapshot.documents, document_id))


def merge_settings(snapshot: WorkspaceSnapshot, updates: Mapping[str, Any]) -> WorkspaceSnapshot:
    """Shallow-merge ``updates`` into the working settings copy.

    Snapshots without loaded settings are returned unchanged.
    """

    if snapshot.settings is None:
        return snapshot
    merged = {key: value for key, value in snapshot.settings.items()}
    merged.update(updates)
    return replace(snapshot, settings=merged)


def replace_settings(snapshot: WorkspaceSnapshot, settings: Mapping[str, Any]) -> WorkspaceSnapshot:
    return replace(snapshot, settings=dict(settings))
