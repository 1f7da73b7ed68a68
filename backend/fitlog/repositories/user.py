"""User repository: lookups by the identity keys."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute

from fitlog.models.user import User
from fitlog.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Users are provisioned from the identity provider; this repository never
    deals with credentials.
    """

    model = User

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "email": User.email,
            "username": User.username,
            "role": User.role,
        }

    def _updatable_fields(self) -> set[str]:
        return {"email", "username", "full_name", "role"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def is_admin(self, user_id: int | None) -> bool:
        """Return ``True`` when ``user_id`` exists and carries the admin role."""
        if user_id is None:
            return False
        user = self.get(user_id)
        return bool(user and user.is_admin)
