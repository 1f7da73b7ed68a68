"""User model: identities issued by the external identity provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Enum, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .body_metrics import BodyMetric
    from .routine import Routine
    from .workout import WorkoutLog

ROLE_MEMBER = "MEMBER"
ROLE_COACH = "COACH"
ROLE_ADMIN = "ADMIN"

UserRole = Enum(ROLE_MEMBER, ROLE_COACH, ROLE_ADMIN, name="user_role")


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Application user.

    Credentials live with the identity provider; the API only receives signed
    access tokens whose ``sub`` claim is :attr:`id`.

    Fields
    ------
    email : str
        Contact email, stored normalized (lowercase, trimmed).
    username : str
        Public handle, unique per system.
    full_name : str | None
        Optional display name.
    role : str
        ``MEMBER`` (default), ``COACH`` or ``ADMIN``. Admins may read and edit
        every routine; coaches and admins assign routines to members.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(UserRole, nullable=False, server_default=ROLE_MEMBER)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_email", "email"),
    )

    routines: Mapped[list[Routine]] = relationship(
        "Routine", back_populates="owner", cascade="all, delete-orphan"
    )
    workout_logs: Mapped[list[WorkoutLog]] = relationship(
        "WorkoutLog", back_populates="user", cascade="all, delete-orphan"
    )
    body_metrics: Mapped[list[BodyMetric]] = relationship(
        "BodyMetric", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def can_coach(self) -> bool:
        """Coaches and admins may assign routines to other users."""
        return self.role in (ROLE_COACH, ROLE_ADMIN)

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
