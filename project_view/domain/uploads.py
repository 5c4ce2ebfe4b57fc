"""Domain entities for document ingestion batches."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from project_view.core.schema import Document

from .errors import StageFailure


class UploadStage(str, Enum):
    """Ordered steps every upload item passes through."""

    RESERVE = "reserve"
    TRANSFER = "transfer"
    CONFIRM = "confirm"


@dataclass(slots=True)
class FileItem:
    """A single file submitted as part of an upload batch."""

    name: str
    payload: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.payload)

    @property
    def media_type(self) -> str:
        return self.content_type or "application/octet-stream"


@dataclass(slots=True)
class BatchUploadResult:
    """Settled outcome of one upload batch."""

    documents: list[Document] = field(default_factory=list)
    failures: list[StageFailure] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.documents)

    @property
    def failure_count(self) -> int:
        return len(self.failures)
