"""Application services."""

from .conversations import ConversationManager
from .documents import DocumentLifecycleManager
from .loader import WorkspaceLoader
from .settings import SettingsController
from .store import WorkspaceStore
from .workspaces import WorkspaceSession

__all__ = [
    "ConversationManager",
    "DocumentLifecycleManager",
    "SettingsController",
    "WorkspaceLoader",
    "WorkspaceSession",
    "WorkspaceStore",
]
