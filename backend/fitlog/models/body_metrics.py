"""Body measurements tracked over time, one row per user and day."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, Date, ForeignKey, Index, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from fitlog.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User

MAX_WEIGHT_KG = 999.99  # Numeric(5, 2)


class BodyMetric(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One body measurement of a user.

    Fields
    ------
    user_id : int
        FK to :class:`User`. ``ON DELETE CASCADE``.
    measured_on : date
        Measurement day; unique per user, so a second reading on the same day
        replaces the first.
    weight_kg : float
        Body weight in kilograms, positive.
    body_fat_pct : float | None
        Optional body fat percentage in [0, 100].
    notes : str | None
        Free-form notes.
    """

    __tablename__ = "body_metrics"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    measured_on: Mapped[date] = mapped_column(Date, nullable=False)
    # Float at runtime, NUMERIC precision in the database.
    weight_kg: Mapped[float] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=False)
    body_fat_pct: Mapped[float | None] = mapped_column(Numeric(4, 1, asdecimal=False), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="body_metrics")

    __table_args__ = (
        UniqueConstraint("user_id", "measured_on", name="uq_body_metrics_user_day"),
        Index("ix_body_metrics_user_measured", "user_id", "measured_on"),
        CheckConstraint("weight_kg > 0", name="ck_body_metrics_weight_positive"),
        CheckConstraint(
            "(body_fat_pct IS NULL) OR (body_fat_pct >= 0 AND body_fat_pct <= 100)",
            name="ck_body_metrics_body_fat_range",
        ),
    )

    # -------------------- Validators --------------------
    @validates("weight_kg")
    def _validate_weight_kg(self, key: str, value: float) -> float:
        if value is None or value <= 0 or value > MAX_WEIGHT_KG:
            raise ValueError(f"weight_kg must be within (0, {MAX_WEIGHT_KG}].")
        return float(value)

    @validates("body_fat_pct")
    def _validate_body_fat_pct(self, key: str, value: float | None) -> float | None:
        """Ensure body fat percentage is within [0, 100] when present."""
        if value is None:
            return None
        if value < 0 or value > 100:
            raise ValueError("body_fat_pct must be within [0, 100].")
        return float(value)
