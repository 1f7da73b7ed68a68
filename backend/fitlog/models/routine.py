"""Routine templates and their ordered exercise entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .assignment import RoutineAssignment
    from .exercise import Exercise
    from .user import User
    from .workout import WorkoutLog

RoutineCategory = Enum(
    "PUSH",
    "PULL",
    "LEGS",
    "FULLBODY",
    "SPLIT",
    "CARDIO",
    "OTHER",
    name="routine_category",
)


class Routine(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Reusable workout template owned by a user.

    Notes
    -----
    - Names are unique per owner.
    - ``entries`` is always loaded ordered by ``order_index``; the whole list
      is replaced when a composition is saved.
    - Deleting a routine keeps logged workouts (their ``routine_id`` is
      nulled) and drops its assignments.
    """

    __tablename__ = "routines"

    owner_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str] = mapped_column(RoutineCategory, nullable=False, server_default="OTHER")

    __table_args__ = (
        UniqueConstraint("owner_user_id", "name", name="uq_routines_owner_name"),
        Index("ix_routines_owner", "owner_user_id"),
    )

    owner: Mapped[User] = relationship("User", back_populates="routines", lazy="selectin")
    entries: Mapped[list[RoutineExercise]] = relationship(
        "RoutineExercise",
        back_populates="routine",
        cascade="all, delete-orphan",
        order_by="RoutineExercise.order_index",
        lazy="selectin",
    )
    workout_logs: Mapped[list[WorkoutLog]] = relationship("WorkoutLog", back_populates="routine")
    assignments: Mapped[list[RoutineAssignment]] = relationship(
        "RoutineAssignment", back_populates="routine", cascade="all, delete-orphan"
    )


class RoutineExercise(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """One exercise placed in a routine, with its targets and superset key."""

    __tablename__ = "routine_exercises"

    routine_id: Mapped[int] = mapped_column(
        ForeignKey("routines.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[int] = mapped_column(
        ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    target_sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3, server_default="3")
    target_reps: Mapped[int] = mapped_column(Integer, nullable=False, default=10, server_default="10")
    target_weight: Mapped[float] = mapped_column(
        Numeric(6, 2, asdecimal=False), nullable=False, default=0.0, server_default="0"
    )
    rest_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=60, server_default="60")
    notes: Mapped[str | None] = mapped_column(Text)
    # Grouping key shared by the members of one superset run.
    superset_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("routine_id", "order_index", name="uq_routine_exercises_position"),
        Index("ix_routine_exercises_exercise", "exercise_id"),
    )

    routine: Mapped[Routine] = relationship("Routine", back_populates="entries")
    exercise: Mapped[Exercise] = relationship("Exercise", lazy="selectin")
