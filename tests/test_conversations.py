from __future__ import annotations

import asyncio

from conftest import build_session, messages
from project_view.core.naming import default_conversation_title
from project_view.domain import MutationFailure


def test_default_title_is_time_derived():
    assert default_conversation_title(now=1_700_000_012.5) == "Chat #2500"
    assert default_conversation_title("Thread", now=0) == "Thread #0"


def test_create_prepends_server_conversation(backend, session):
    asyncio.run(session.activate())

    outcome = asyncio.run(session.create_conversation())

    assert outcome.ok
    sent = backend.bodies[backend.requests.index(("POST", "/api/chats"))]
    assert sent["project_id"] == "p1"
    assert sent["title"].startswith("Chat #")
    ids = [item.id for item in session.snapshot.conversations]
    assert ids == [outcome.value.id, "c2", "c1"]
    # the canonical title from the server wins over the local draft
    assert session.snapshot.conversations[0].title == sent["title"].upper()
    assert session.store.pending_creates == 0
    assert messages(session, "success") == ["Chat created successfully"]


def test_create_failure_leaves_sequence_untouched(backend, session):
    asyncio.run(session.activate())
    before = session.snapshot.conversations
    backend.fail("POST", "/api/chats")

    outcome = asyncio.run(session.create_conversation())

    assert isinstance(outcome.error, MutationFailure)
    assert outcome.error.operation == "create_conversation"
    assert session.snapshot.conversations is before
    assert session.store.pending_creates == 0
    assert messages(session, "error") == ["Failed to create chat"]


def test_concurrent_creates_are_not_coalesced(backend, session):
    asyncio.run(session.activate())

    async def scenario():
        return await asyncio.gather(session.create_conversation(), session.create_conversation())

    first, second = asyncio.run(scenario())

    assert first.ok and second.ok
    assert backend.count("POST", "/api/chats") == 2
    assert len(session.snapshot.conversations) == 4


def test_delete_removes_conversation_and_is_idempotent(backend, session):
    asyncio.run(session.activate())

    assert asyncio.run(session.delete_conversation("c2")).ok
    assert [item.id for item in session.snapshot.conversations] == ["c1"]

    before = session.snapshot
    assert asyncio.run(session.delete_conversation("missing")).ok
    assert session.snapshot is before


def test_delete_failure_keeps_conversation(backend, session):
    asyncio.run(session.activate())
    backend.fail("DELETE", "/api/chats/c1", status=0)

    outcome = asyncio.run(session.delete_conversation("c1"))

    assert isinstance(outcome.error, MutationFailure)
    assert [item.id for item in session.snapshot.conversations] == ["c2", "c1"]
    assert messages(session, "error") == ["Failed to delete chat"]


def test_mutation_without_identity_is_reported(backend):
    session = build_session(backend, token=None)

    outcome = asyncio.run(session.create_conversation())

    assert isinstance(outcome.error, MutationFailure)
    assert backend.requests == []
