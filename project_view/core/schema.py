from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    # Fields this view does not interpret are kept for the round trip.
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str


class Project(_Record):
    name: str | None = None
    description: str | None = None
    created_at: str | None = None


class Conversation(_Record):
    title: str
    project_id: str | None = None
    created_at: str | None = None


class Document(_Record):
    project_id: str | None = None
    filename: str | None = None
    source_type: str | None = None  # "file" or "url"
    source_url: str | None = None
    processing_status: str | None = None
    file_size: int | None = None
    file_type: str | None = None
    s3_key: str | None = None


class UploadTarget(BaseModel):
    """Write target returned by the reservation stage."""

    model_config = ConfigDict(populate_by_name=True)

    write_target: str = Field(alias="upload_url")
    storage_key: str = Field(alias="s3_key")
