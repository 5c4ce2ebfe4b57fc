from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from project_view.application import WorkspaceSession
from project_view.domain import Outcome, PreconditionFailure

router = APIRouter(prefix="/workspace", tags=["workspace"])


def get_session(request: Request) -> WorkspaceSession:
    session: WorkspaceSession | None = request.app.state.session
    if session is None or session.store.closed:
        raise HTTPException(status_code=409, detail="workspace not active")
    return session


def raise_for_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        return
    status = 409 if isinstance(outcome.error, PreconditionFailure) else 502
    raise HTTPException(status_code=status, detail=str(outcome.error))


def serialise_view(session: WorkspaceSession) -> dict[str, Any]:
    store = session.store
    snapshot = store.snapshot
    return {
        "project_id": session.project_id,
        "status": store.status.value,
        "loading": store.loading,
        "error": str(store.error) if store.error else None,
        "project": snapshot.project.model_dump() if snapshot.project else None,
        "conversations": [item.model_dump() for item in snapshot.conversations],
        "documents": [item.model_dump() for item in snapshot.documents],
        "settings": snapshot.settings,
        "settings_dirty": store.settings_state.dirty,
        "pending_creates": store.pending_creates,
    }


@router.post("")
async def activate_workspace(request: Request, payload: dict) -> dict:
    project_id = str(payload.get("project_id") or "").strip()
    if not project_id:
        raise HTTPException(status_code=400, detail="project_id is required")

    state = request.app.state
    if state.session is not None:
        await state.session.close()
    session = WorkspaceSession.from_config(
        project_id,
        state.config,
        state.identity,
        notifier=state.notifier,
        http_client=state.http_client,
    )
    state.session = session
    raise_for_outcome(await session.activate())
    return serialise_view(session)


@router.get("")
async def get_workspace(session: WorkspaceSession = Depends(get_session)) -> dict:
    return serialise_view(session)


@router.delete("")
async def close_workspace(request: Request, session: WorkspaceSession = Depends(get_session)) -> dict:
    await session.close()
    request.app.state.session = None
    return {"project_id": session.project_id, "closed": True}


@router.get("/notifications")
async def drain_notifications(request: Request) -> dict:
    items = request.app.state.notifier.drain()
    return {"items": [{"level": item.level, "message": item.message} for item in items]}


@router.post("/conversations")
async def create_conversation(session: WorkspaceSession = Depends(get_session)) -> dict:
    outcome = await session.create_conversation()
    raise_for_outcome(outcome)
    return {"item": outcome.value.model_dump()}


@router.delete("/conversations/{conversation_id}")
async def delete_conversation(conversation_id: str, session: WorkspaceSession = Depends(get_session)) -> dict:
    raise_for_outcome(await session.delete_conversation(conversation_id))
    return {"deleted": conversation_id, "conversations": len(session.snapshot.conversations)}


@router.get("/documents/{document_id}")
async def get_document(document_id: str, session: WorkspaceSession = Depends(get_session)) -> dict:
    document = session.snapshot.find_document(document_id)
    if document is None:
        raise HTTPException(status_code=404, detail="document not found")
    return {"item": document.model_dump()}


@router.delete("/documents/{document_id}")
async def delete_document(document_id: str, session: WorkspaceSession = Depends(get_session)) -> dict:
    raise_for_outcome(await session.delete_document(document_id))
    return {"deleted": document_id, "documents": len(session.snapshot.documents)}


@router.post("/documents/url")
async def add_document_from_url(payload: dict, session: WorkspaceSession = Depends(get_session)) -> dict:
    url = payload.get("url")
    if not isinstance(url, str):
        raise HTTPException(status_code=400, detail="url is required")
    outcome = await session.add_document_from_url(url)
    raise_for_outcome(outcome)
    return {"item": outcome.value.model_dump()}
