"""Failure taxonomy for workspace orchestration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class WorkspaceError(RuntimeError):
    """Base class for failures surfaced by the workspace view."""


class LoadFailure(WorkspaceError):
    """Raised when any of the initial workspace reads failed."""


class MutationFailure(WorkspaceError):
    """Raised when a single create/delete/update call failed."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(message or f"{operation} failed")
        self.operation = operation


class StageFailure(WorkspaceError):
    """Raised when one ingestion stage failed for one upload item."""

    def __init__(self, filename: str, stage: str, message: str | None = None) -> None:
        super().__init__(message or f"{stage} failed for {filename}")
        self.filename = filename
        self.stage = stage


class PreconditionFailure(WorkspaceError):
    """Raised when an operation is attempted before its inputs exist."""


@dataclass(slots=True)
class Outcome(Generic[T]):
    """Result of an orchestration call; failures are carried, never raised."""

    value: T | None = None
    error: WorkspaceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: WorkspaceError) -> "Outcome[Any]":
        return cls(value=None, error=error)
