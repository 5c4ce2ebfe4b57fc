"""Domain layer definitions."""

from .errors import (
    LoadFailure,
    MutationFailure,
    Outcome,
    PreconditionFailure,
    StageFailure,
    WorkspaceError,
)
from .uploads import BatchUploadResult, FileItem, UploadStage
from .workspaces import LoadStatus, SettingsState, WorkspaceSnapshot

__all__ = [
    "BatchUploadResult",
    "FileItem",
    "LoadFailure",
    "LoadStatus",
    "MutationFailure",
    "Outcome",
    "PreconditionFailure",
    "SettingsState",
    "StageFailure",
    "UploadStage",
    "WorkspaceError",
    "WorkspaceSnapshot",
]
