"""Logged workouts: what was actually performed, set by set."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .exercise import Exercise
    from .routine import Routine
    from .user import User


class WorkoutLog(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A finished workout.

    ``routine_id`` points at the template the workout was started from and is
    nulled when that routine is deleted.
    """

    __tablename__ = "workout_logs"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    routine_id: Mapped[int | None] = mapped_column(
        ForeignKey("routines.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")

    __table_args__ = (Index("ix_workout_logs_user_completed", "user_id", "completed_at"),)

    user: Mapped[User] = relationship("User", back_populates="workout_logs")
    routine: Mapped[Routine | None] = relationship("Routine", back_populates="workout_logs")
    exercises: Mapped[list[WorkoutExercise]] = relationship(
        "WorkoutExercise",
        back_populates="workout_log",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order_index",
        lazy="selectin",
    )


class WorkoutExercise(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Exercise performed within a workout, in execution order."""

    __tablename__ = "workout_exercises"

    workout_log_id: Mapped[int] = mapped_column(
        ForeignKey("workout_logs.id", ondelete="CASCADE"), nullable=False
    )
    exercise_id: Mapped[int] = mapped_column(
        ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    superset_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("workout_log_id", "order_index", name="uq_workout_exercises_position"),
    )

    workout_log: Mapped[WorkoutLog] = relationship("WorkoutLog", back_populates="exercises")
    exercise: Mapped[Exercise] = relationship("Exercise", lazy="selectin")
    sets: Mapped[list[WorkoutSet]] = relationship(
        "WorkoutSet",
        back_populates="workout_exercise",
        cascade="all, delete-orphan",
        order_by="WorkoutSet.set_number",
        lazy="selectin",
    )


class WorkoutSet(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """A completed set."""

    __tablename__ = "workout_sets"

    workout_exercise_id: Mapped[int] = mapped_column(
        ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    weight: Mapped[float] = mapped_column(
        Numeric(6, 2, asdecimal=False), nullable=False, server_default="0"
    )
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    __table_args__ = (
        UniqueConstraint("workout_exercise_id", "set_number", name="uq_workout_sets_number"),
    )

    workout_exercise: Mapped[WorkoutExercise] = relationship(
        "WorkoutExercise", back_populates="sets"
    )
