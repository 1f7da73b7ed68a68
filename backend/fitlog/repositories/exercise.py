"""Exercise catalog repository: visibility-aware listing and lookups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast

from sqlalchemy import ColumnElement, Select, false, func, or_, select
from sqlalchemy.orm import InstrumentedAttribute

from fitlog.models.exercise import Exercise
from fitlog.repositories.base import BaseRepository, Page, Pagination


class ExerciseRepository(BaseRepository[Exercise]):
    """
    Persistence-only repository for :class:`fitlog.models.exercise.Exercise`.

    An actor sees every global exercise (``is_custom = False``) plus the
    custom exercises they own.
    """

    model = Exercise

    # ----------------------------- Whitelists ---------------------------------
    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": self.model.id,
            "name": self.model.name,
            "slug": self.model.slug,
            "category": self.model.category,
            "muscle_group": self.model.muscle_group,
            "equipment": self.model.equipment,
            "created_at": self.model.created_at,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "category": self.model.category,
            "muscle_group": self.model.muscle_group,
            "equipment": self.model.equipment,
            "is_custom": self.model.is_custom,
            "owner_user_id": self.model.owner_user_id,
        }

    def _updatable_fields(self) -> set[str]:
        # ``slug`` stays out to keep references stable.
        return {"name", "category", "muscle_group", "equipment", "description"}

    # ----------------------------- Visibility ---------------------------------
    def _visible_to(self, actor_id: int | None) -> ColumnElement[bool]:
        global_rows = self.model.is_custom.is_(false())
        if actor_id is None:
            return global_rows
        return or_(global_rows, self.model.owner_user_id == actor_id)

    def visible_stmt(
        self,
        actor_id: int | None,
        *,
        search: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> Select[Any]:
        """Build the catalog query for an actor.

        :param actor_id: Requesting user; ``None`` restricts to global rows.
        :type actor_id: int | None
        :param search: Case-insensitive substring matched against the name.
        :type search: str | None
        :param filters: Whitelisted equality filters (``muscle_group``...).
        :type filters: Mapping[str, Any] | None
        :rtype: :class:`sqlalchemy.sql.Select`
        """
        stmt: Select[Any] = select(self.model).where(self._visible_to(actor_id))
        term = (search or "").strip().lower()
        if term:
            stmt = stmt.where(func.lower(self.model.name).contains(term, autoescape=True))
        return self._apply_equality_filters(stmt, filters)

    def paginate_visible(
        self,
        actor_id: int | None,
        pagination: Pagination,
        *,
        search: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> Page[Exercise]:
        """Page through the exercises ``actor_id`` may use, by name by default."""
        if not pagination.sort:
            pagination = Pagination(page=pagination.page, limit=pagination.limit, sort=["name"])
        stmt = self.visible_stmt(actor_id, search=search, filters=filters)
        return self.paginate_stmt(stmt, pagination)

    def get_visible(self, exercise_id: int, actor_id: int | None) -> Exercise | None:
        stmt = select(self.model).where(
            self.model.id == exercise_id, self._visible_to(actor_id)
        )
        return cast(Exercise | None, self.session.execute(stmt).scalars().first())

    # ------------------------------- Lookups ----------------------------------
    def get_by_slug(self, slug: str) -> Exercise | None:
        stmt = select(self.model).where(self.model.slug == slug)
        return cast(Exercise | None, self.session.execute(stmt).scalars().first())

    def names_by_id(self, ids: Iterable[int]) -> dict[int, str]:
        """Map exercise ids to names in one roundtrip (unknown ids are absent)."""
        wanted = {int(i) for i in ids}
        if not wanted:
            return {}
        stmt = select(self.model.id, self.model.name).where(self.model.id.in_(wanted))
        return {row.id: row.name for row in self.session.execute(stmt)}
