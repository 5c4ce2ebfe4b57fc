from __future__ import annotations

from fastapi import APIRouter, Depends

from project_view.application import WorkspaceSession

from .workspace import get_session, raise_for_outcome

router = APIRouter(prefix="/workspace/settings", tags=["settings"])


@router.patch("")
async def draft_settings(payload: dict, session: WorkspaceSession = Depends(get_session)) -> dict:
    """Merge fields into the local working copy without contacting the backend."""
    applied = session.draft_settings(payload)
    state = session.store.settings_state
    return {"applied": applied, "settings": state.draft, "dirty": state.dirty}


@router.post("/publish")
async def publish_settings(session: WorkspaceSession = Depends(get_session)) -> dict:
    outcome = await session.publish_settings()
    raise_for_outcome(outcome)
    return {"settings": outcome.value, "dirty": session.store.settings_state.dirty}
