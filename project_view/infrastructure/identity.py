"""Caller identity hooks.

The view never acquires credentials itself.  An identity collaborator hands
out the bearer token for each remote call; tests and the local API use the
static implementation below.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class IdentityProvider(Protocol):
    """Contract for bearer credential sources."""

    @property
    def user_id(self) -> str | None:
        """Identifier of the signed-in caller, if any."""

    async def get_token(self) -> str | None:
        """Return a bearer token, or ``None`` when nobody is signed in."""


@dataclass(slots=True)
class StaticIdentity:
    """Identity backed by a fixed token."""

    token: str | None = None
    user_id: str | None = None

    async def get_token(self) -> str | None:
        return self.token
