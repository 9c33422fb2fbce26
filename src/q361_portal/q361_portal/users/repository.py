from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PermissionOverride, User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError


class PermissionRepository(Protocol):
    """Per-user module overrides layered on top of role defaults."""

    def list_active_for_user(self, user_id: int) -> Sequence[PermissionOverride]:
        raise NotImplementedError
