from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_master_face(self, user_id: int) -> Optional[bytes]:
        raise NotImplementedError

    def save_master_face(self, user_id: int, image: bytes) -> bool:
        """Store the enrolled reference image. Only writes when none exists yet."""

        raise NotImplementedError
