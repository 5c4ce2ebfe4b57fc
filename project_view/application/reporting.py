from __future__ import annotations

import logging

from project_view.domain import Outcome, WorkspaceError
from project_view.infrastructure import Notifier

logger = logging.getLogger(__name__)


def report_failure(notifier: Notifier, error: WorkspaceError, cause: BaseException | None, message: str) -> Outcome:
    """Log ``error``, show ``message`` to the user and wrap it in an outcome."""

    if cause is not None:
        error.__cause__ = cause
    logger.warning("%s (%s)", error, cause or "no remote call")
    notifier.error(message)
    return Outcome.failed(error)
