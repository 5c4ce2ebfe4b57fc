"""Infrastructure layer exports."""

from .identity import IdentityProvider, StaticIdentity
from .notifications import LoggingNotifier, Notification, Notifier, QueuedNotifier
from .remote import (
    AuthorizationError,
    RemoteAccessError,
    RemoteAccessFacade,
    RemotePayloadError,
    RemoteStatusError,
    RemoteTransportError,
)

__all__ = [
    "AuthorizationError",
    "IdentityProvider",
    "LoggingNotifier",
    "Notification",
    "Notifier",
    "QueuedNotifier",
    "RemoteAccessError",
    "RemoteAccessFacade",
    "RemotePayloadError",
    "RemoteStatusError",
    "RemoteTransportError",
    "StaticIdentity",
]
