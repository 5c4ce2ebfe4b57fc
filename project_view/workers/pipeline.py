from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Sequence

from pydantic import ValidationError

from project_view.core.merges import prepend_documents
from project_view.core.schema import Document, UploadTarget
from project_view.domain import BatchUploadResult, FileItem, StageFailure, UploadStage
from project_view.infrastructure import Notifier, RemoteAccessError, RemoteAccessFacade

if TYPE_CHECKING:
    from project_view.application.store import WorkspaceStore

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Runs reserve -> transfer -> confirm for every file of a batch.

    Items run concurrently and fail independently; the batch waits for every
    item to settle and merges the confirmed documents in one step.
    """

    def __init__(self, project_id: str, remote: RemoteAccessFacade, store: WorkspaceStore, notifier: Notifier) -> None:
        self._project_id = project_id
        self._remote = remote
        self._store = store
        self._notifier = notifier

    async def upload(self, files: Sequence[FileItem]) -> BatchUploadResult:
        result = BatchUploadResult()
        if not files:
            return result

        outcomes = await asyncio.gather(*(self._ingest(item) for item in files), return_exceptions=True)
        for item, outcome in zip(files, outcomes):
            if isinstance(outcome, StageFailure):
                result.failures.append(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.documents.append(outcome)

        logger.info(
            "Upload batch for project %s settled: %d succeeded, %d failed",
            self._project_id,
            result.success_count,
            result.failure_count,
        )
        if result.documents:
            self._store.apply(prepend_documents, result.documents)
            self._notifier.success(f"{result.success_count} file(s) uploaded")
        return result

    async def _ingest(self, item: FileItem) -> Document:
        stage = UploadStage.RESERVE
        try:
            target = await self._reserve(item)
            stage = UploadStage.TRANSFER
            await self._remote.upload_binary(target.write_target, item.payload, item.media_type)
            stage = UploadStage.CONFIRM
            document = await self._confirm(target)
        except (RemoteAccessError, ValidationError) as exc:
            logger.warning("Upload of %s failed at %s: %s", item.name, stage.value, exc)
            self._notifier.error(f"Failed to upload {item.name}")
            raise StageFailure(item.name, stage.value) from exc

        logger.debug("Uploaded %s as document %s", item.name, document.id)
        return document

    async def _reserve(self, item: FileItem) -> UploadTarget:
        payload = await self._remote.post(
            f"/api/projects/{self._project_id}/files/upload-url",
            {"filename": item.name, "file_size": item.size, "file_type": item.media_type},
        )
        return UploadTarget.model_validate(payload)

    async def _confirm(self, target: UploadTarget) -> Document:
        payload = await self._remote.post(
            f"/api/projects/{self._project_id}/files/confirm",
            {"s3_key": target.storage_key},
        )
        return Document.model_validate(payload)
