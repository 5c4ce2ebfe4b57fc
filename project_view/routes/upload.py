from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from project_view.application import WorkspaceSession
from project_view.domain import FileItem

from .workspace import get_session

router = APIRouter(prefix="/workspace/documents", tags=["upload"])


@router.post("/upload")
async def upload_documents(
    files: list[UploadFile] = File(...),
    session: WorkspaceSession = Depends(get_session),
) -> dict:
    """Upload a batch of files; failed items are reported next to the stored ones."""
    if not files:
        raise HTTPException(status_code=400, detail="At least one file must be provided")

    items: list[FileItem] = []
    for upload in files:
        try:
            if not upload.filename:
                raise HTTPException(status_code=400, detail="Uploaded file must have a filename")
            items.append(
                FileItem(
                    name=Path(upload.filename).name,
                    payload=await upload.read(),
                    content_type=upload.content_type,
                )
            )
        finally:
            await upload.close()

    result = await session.upload_documents(items)
    return {
        "uploaded": result.success_count,
        "items": [document.model_dump() for document in result.documents],
        "failures": [
            {"filename": failure.filename, "stage": failure.stage, "error": str(failure.__cause__ or failure)}
            for failure in result.failures
        ],
    }
