"""Read access to marketplace users."""

from __future__ import annotations

from sqlalchemy import select

from rentdesk.core.exceptions import NotFoundError
from rentdesk.models import User, UserRole
from rentdesk.services.base_service import BaseService


class UserService(BaseService):
    def get_user(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def require_user(self, user_id: int, role: UserRole | None = None) -> User:
        """Return the user, or raise NotFoundError when absent or not of ``role``."""
        user = self.get_user(user_id)
        if user is None or (role is not None and user.role is not role):
            label = role.value if role is not None else "user"
            raise NotFoundError(f"The specified {label} does not exist.")
        return user

    def list_ids_by_role(self, role: UserRole) -> list[int]:
        return list(self.db.scalars(select(User.id).where(User.role == role).order_by(User.id)))
