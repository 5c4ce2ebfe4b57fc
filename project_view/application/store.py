"""Single-owner state container for one workspace view."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from project_view.core.merges import merge_settings, replace_settings
from project_view.domain import LoadFailure, LoadStatus, SettingsState, WorkspaceSnapshot

logger = logging.getLogger(__name__)

Observer = Callable[["WorkspaceStore"], None]
Merge = Callable[..., WorkspaceSnapshot]


class WorkspaceStore:
    """Holds the snapshot and the flags observers read alongside it.

    Only :meth:`complete_load` replaces the whole snapshot; every other change
    goes through :meth:`apply` with a pure merge function.
    """

    def __init__(self) -> None:
        self._snapshot = WorkspaceSnapshot()
        self._published: dict[str, Any] | None = None
        self._status = LoadStatus.IDLE
        self._error: LoadFailure | None = None
        self._observers: list[Observer] = []
        self._pending_creates = 0
        self._closed = False

    # ------------------------------------------------------------------
    # read access
    # ------------------------------------------------------------------
    @property
    def snapshot(self) -> WorkspaceSnapshot:
        return self._snapshot

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is LoadStatus.LOADING

    @property
    def error(self) -> LoadFailure | None:
        return self._error

    @property
    def settings_state(self) -> SettingsState:
        return SettingsState(published=self._published, draft=self._snapshot.settings)

    @property
    def pending_creates(self) -> int:
        return self._pending_creates

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # load lifecycle
    # ------------------------------------------------------------------
    def begin_loading(self) -> None:
        self._status = LoadStatus.LOADING
        self._error = None
        self._notify()

    def complete_load(self, snapshot: WorkspaceSnapshot) -> None:
        self._snapshot = snapshot
        self._published = dict(snapshot.settings) if snapshot.settings is not None else None
        self._status = LoadStatus.READY if snapshot.ready else LoadStatus.NOT_FOUND
        self._error = None
        self._notify()

    def fail_load(self, error: LoadFailure) -> None:
        self._status = LoadStatus.ERROR
        self._error = error
        self._notify()

    # ------------------------------------------------------------------
    # merges
    # ------------------------------------------------------------------
    def apply(self, merge: Merge, *args: Any) -> WorkspaceSnapshot:
        updated = merge(self._snapshot, *args)
        if updated is not self._snapshot:
            self._snapshot = updated
            self._notify()
        return updated

    def draft_settings(self, updates: Mapping[str, Any]) -> bool:
        if self._snapshot.settings is None:
            logger.warning("Cannot update settings: not loaded yet")
            return False
        self.apply(merge_settings, updates)
        return True

    def confirm_settings(self, settings: Mapping[str, Any]) -> None:
        self._published = dict(settings)
        self.apply(replace_settings, settings)

    def track_create(self, delta: int) -> None:
        self._pending_creates = max(0, self._pending_creates + delta)

    # ------------------------------------------------------------------
    # observers
    # ------------------------------------------------------------------
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)

    def close(self) -> None:
        """Tear down the view; observers are disposed, state is dropped."""

        self._observers.clear()
        self._snapshot = WorkspaceSnapshot()
        self._published = None
        self._status = LoadStatus.IDLE
        self._error = None
        self._closed = True
