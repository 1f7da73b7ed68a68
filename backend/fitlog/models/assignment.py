"""Routines a coach hands to the members they train."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .routine import Routine
    from .user import User


class RoutineAssignment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A routine assigned to a member.

    Notes
    -----
    - A routine is assigned at most once to the same member.
    - The member may read the routine and start workouts from it while the
      assignment exists; ownership stays with the coach.
    - Deleting the routine, the member or the coach removes the assignment.
    """

    __tablename__ = "routine_assignments"

    routine_id: Mapped[int] = mapped_column(
        ForeignKey("routines.id", ondelete="CASCADE"), nullable=False
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    assigned_by: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        UniqueConstraint("routine_id", "student_id", name="uq_routine_assignments_routine_student"),
        Index("ix_routine_assignments_student", "student_id"),
        Index("ix_routine_assignments_assigned_by", "assigned_by"),
    )

    routine: Mapped[Routine] = relationship(
        "Routine", back_populates="assignments", lazy="selectin"
    )
    student: Mapped[User] = relationship("User", foreign_keys=[student_id], lazy="selectin")
    coach: Mapped[User] = relationship("User", foreign_keys=[assigned_by], lazy="selectin")
