from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import PRIVILEGED_ROLES
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code). The enrolled face image lives
    in the user store but is loaded separately, only when verifying.
    """

    user_id: int
    name: str
    username: str
    password_hash: str
    role: Role
    manager_id: Optional[int] = None
    is_active: bool = True

    @property
    def is_privileged(self) -> bool:
        return self.role in PRIVILEGED_ROLES
