# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel


class AuthContext(BaseModel):
    """Caller identity taken from the X-User-Id and X-Role headers.

    The user ID doubles as the employee ID in the employee directory.
    """

    user_id: uuid.UUID
    role: str = "employee"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def can_act_for(self, employee_id: uuid.UUID) -> bool:
        """Admins act for anyone; employees only for themselves."""
        return self.is_admin or self.user_id == employee_id
