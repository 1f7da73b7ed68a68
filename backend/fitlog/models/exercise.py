"""Exercise catalog: global definitions plus per-user custom exercises."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

# --- Domain Enums ---
ExerciseCategory = Enum("PUSH", "PULL", "LEGS", "CARDIO", "CORE", "OTHER", name="exercise_category")

MuscleGroup = Enum(
    "CHEST",
    "BACK",
    "SHOULDERS",
    "LEGS",
    "ARMS",
    "CORE",
    "FULL_BODY",
    name="muscle_group",
)

Equipment = Enum(
    "BARBELL",
    "DUMBBELL",
    "MACHINE",
    "CABLE",
    "BODYWEIGHT",
    "OTHER",
    name="equipment",
)


class Exercise(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Exercise definition referenced by routine entries and logged workouts.

    Notes
    -----
    - Global exercises have ``is_custom = False`` and no owner.
    - Custom exercises belong to ``owner_user_id`` and are only visible to
      that user.
    """

    __tablename__ = "exercises"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    slug: Mapped[str] = mapped_column(String(140), nullable=False)
    category: Mapped[str] = mapped_column(ExerciseCategory, nullable=False, server_default="OTHER")
    muscle_group: Mapped[str] = mapped_column(MuscleGroup, nullable=False)
    equipment: Mapped[str] = mapped_column(Equipment, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    is_custom: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    owner_user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )

    __table_args__ = (
        Index("ix_exercises_name", "name"),
        UniqueConstraint("slug", name="uq_exercises_slug"),
        CheckConstraint("length(slug) > 0", name="slug_not_empty"),
    )

    owner: Mapped[User | None] = relationship("User", lazy="selectin")
