"""Routine repository: routine templates and their ordered entries.

Entries are always replaced as a whole when a composition is saved; the
repository offers that as a single persistence helper while authorisation and
superset consistency stay in the service and domain layers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, cast

from sqlalchemy import Select, and_, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from fitlog.domain.composer import EntryRecord
from fitlog.models.routine import Routine, RoutineExercise
from fitlog.repositories.base import BaseRepository, Page, Pagination


class RoutineRepository(BaseRepository[Routine]):
    """Persist :class:`Routine` aggregates together with their entries."""

    model = Routine

    # ----------------------------- Whitelists ---------------------------------
    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "id": self.model.id,
            "name": self.model.name,
            "category": self.model.category,
            "created_at": self.model.created_at,
            "updated_at": self.model.updated_at,
        }

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "owner_user_id": self.model.owner_user_id,
            "category": self.model.category,
            "name": self.model.name,
        }

    def _updatable_fields(self) -> set[str]:
        return {"name", "description", "category"}

    # ----------------------------- Eager loading -------------------------------
    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        """Load entries and their exercise in two extra roundtrips."""
        return stmt.options(
            selectinload(self.model.entries).selectinload(RoutineExercise.exercise)
        )

    # ----------------------------- Lookups ------------------------------------
    def get_by_owner_and_name(self, owner_user_id: int, name: str) -> Routine | None:
        """Retrieve a routine by owner and name (unique per owner).

        :param owner_user_id: Identifier of the owning user.
        :type owner_user_id: int
        :param name: Routine name.
        :type name: str
        :rtype: Routine | None
        """
        stmt: Select[Any] = select(self.model).where(
            and_(self.model.owner_user_id == owner_user_id, self.model.name == name)
        )
        stmt = self._default_eagerload(stmt)
        return cast(Routine | None, self.session.execute(stmt).scalars().first())

    def list_by_owner(
        self, owner_user_id: int, *, sort: Iterable[str] | None = None
    ) -> list[Routine]:
        """List routines owned by a user with optional whitelisted sorting."""
        return self.list(filters={"owner_user_id": owner_user_id}, sort=sort)

    def paginate_for(
        self,
        owner_user_id: int | None,
        pagination: Pagination,
        *,
        filters: Mapping[str, Any] | None = None,
    ) -> Page[Routine]:
        """Page through routines, restricted to one owner unless ``None``."""
        merged = dict(filters or {})
        if owner_user_id is not None:
            merged["owner_user_id"] = owner_user_id
        return self.paginate(pagination, filters=merged)

    # ----------------------------- Entries -------------------------------------
    def replace_entries(self, routine: Routine, records: Iterable[EntryRecord]) -> list[RoutineExercise]:
        """Swap every entry row of ``routine`` for ``records``.

        Old rows are deleted and flushed before the new ones are inserted so
        the ``(routine_id, order_index)`` unique key never sees both.

        :param routine: Persistent routine (its ``id`` must be populated).
        :type routine: Routine
        :param records: Serialized composer entries.
        :type records: Iterable[EntryRecord]
        :returns: Newly staged rows in order.
        :rtype: list[RoutineExercise]
        """
        routine.entries.clear()
        self.flush()
        rows = [
            RoutineExercise(
                exercise_id=r.exercise_ref,
                order_index=r.order,
                target_sets=r.target_sets,
                target_reps=r.target_reps,
                target_weight=r.target_weight,
                rest_seconds=r.rest_seconds,
                notes=r.notes or None,
                superset_id=r.superset_group,
            )
            for r in sorted(records, key=lambda r: r.order)
        ]
        routine.entries.extend(rows)
        self.flush()
        return rows
