"""
Routine drafts: composer editing sessions parked between HTTP requests.

A draft is opened empty (new routine) or hydrated from a stored routine
(edit mode). Every command loads the composer snapshot from the
:class:`RoutineDraftStore`, applies one composer operation and writes the
snapshot back. Saving hands the serialized entries to
:class:`RoutineCommandService` and drops the draft once the routine is stored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fitlog.domain.composer import RoutineComposer
from fitlog.domain.errors import DomainError, InvalidFieldError, InvalidValueError, OutOfRangeError
from fitlog.services._shared.base import BaseService, ServiceContext
from fitlog.services._shared.errors import InvalidOperationError, NotFoundError
from fitlog.services._shared.ports import DraftRecord, RoutineDraftStore

from ._converters import draft_to_out, routine_to_out
from .command import RoutineCommandService
from .dto import (
    DraftEntryAddIn,
    DraftEntryUpdateIn,
    DraftOpenIn,
    DraftOut,
    DraftReorderIn,
    DraftSaveIn,
    DraftSaveOut,
    RoutineCompositionIn,
    entry_records,
)

logger = logging.getLogger(__name__)

_ERROR_CODES: dict[type[DomainError], str] = {
    OutOfRangeError: "index_out_of_range",
    InvalidFieldError: "invalid_field",
    InvalidValueError: "invalid_value",
}


@contextmanager
def _composer_errors() -> Iterator[None]:
    """Re-raise composer failures as :class:`InvalidOperationError`."""
    try:
        yield
    except DomainError as exc:
        code = _ERROR_CODES.get(type(exc), "invalid_operation")
        raise InvalidOperationError(str(exc), code=code) from exc


class RoutineDraftService(BaseService):
    """
    Drive a :class:`RoutineComposer` across requests.

    Drafts are private to the user that opened them, admins included.
    A missing or expired draft raises :class:`NotFoundError`.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        store: RoutineDraftStore | None = None,
    ) -> None:
        super().__init__(ctx=ctx)
        self._store = store

    @property
    def store(self) -> RoutineDraftStore:
        if self._store is None:
            from fitlog.core.extensions import get_routine_draft_store

            self._store = get_routine_draft_store()
        return self._store

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _load(self, draft_id: str) -> tuple[DraftRecord, RoutineComposer]:
        record = self.store.load(draft_id)
        if record is None or record.owner_id != self.ctx.actor_id:
            raise NotFoundError("RoutineDraft", draft_id)
        return record, RoutineComposer.from_snapshot(record.state)

    def _persist(self, record: DraftRecord, composer: RoutineComposer) -> DraftOut:
        updated = DraftRecord(
            draft_id=record.draft_id,
            owner_id=record.owner_id,
            routine_id=record.routine_id,
            state=composer.snapshot(),
        )
        self.store.save(updated)
        return draft_to_out(updated, composer)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def open(self, dto: DraftOpenIn) -> DraftOut:
        """
        Start an editing session.

        :param dto: ``routine_id`` to edit an existing routine, ``None`` for a new one.
        :type dto: DraftOpenIn
        :returns: The fresh draft.
        :rtype: DraftOut
        :raises NotFoundError: When the routine does not exist.
        :raises AuthorizationError: When the actor may not edit the routine.
        """
        with self.ro_uow() as uow:
            actor_id = self.require_actor(uow)
            composer = RoutineComposer()
            if dto.routine_id is not None:
                routine = uow.routines.get(dto.routine_id)
                if routine is None:
                    raise NotFoundError("Routine", dto.routine_id)
                self.ensure_owner(
                    actor_id,
                    routine.owner_user_id,
                    is_admin=self.actor_is_admin(uow),
                    msg="Cannot edit another user's routine.",
                )
                stored = routine_to_out(routine).entries
                composer = RoutineComposer.hydrate(
                    entry_records(stored),
                    names={e.exercise_id: e.exercise_name for e in stored},
                )

        record = DraftRecord(
            draft_id=self.store.new_id(),
            owner_id=actor_id,
            routine_id=dto.routine_id,
        )
        out = self._persist(record, composer)
        logger.info(
            "Routine draft opened",
            extra={"draft_id": record.draft_id, "routine_id": dto.routine_id},
        )
        return out

    def get(self, draft_id: str) -> DraftOut:
        record, composer = self._load(draft_id)
        return draft_to_out(record, composer)

    def discard(self, draft_id: str) -> None:
        self._load(draft_id)
        self.store.delete(draft_id)
        logger.info("Routine draft discarded", extra={"draft_id": draft_id})

    # ------------------------------------------------------------------ #
    # Editing
    # ------------------------------------------------------------------ #

    def add_entry(self, dto: DraftEntryAddIn) -> DraftOut:
        """
        Append an exercise with default targets.

        :raises NotFoundError: When the exercise is unknown or not visible.
        """
        record, composer = self._load(dto.draft_id)
        with self.ro_uow() as uow:
            exercise = uow.exercises.get_visible(dto.exercise_id, self.ctx.actor_id)
            if exercise is None:
                raise NotFoundError("Exercise", dto.exercise_id)
            name = exercise.name
        composer.add_entry(dto.exercise_id, name)
        return self._persist(record, composer)

    def remove_entry(self, draft_id: str, index: int) -> DraftOut:
        record, composer = self._load(draft_id)
        with _composer_errors():
            composer.remove_entry(index)
        return self._persist(record, composer)

    def update_entry(self, dto: DraftEntryUpdateIn) -> DraftOut:
        """
        Apply ``dto.changes`` to one entry.

        Changes are all-or-nothing: when one of them fails the draft is left
        as it was.
        """
        record, composer = self._load(dto.draft_id)
        with _composer_errors():
            for field, value in dto.changes.items():
                composer.update_entry(dto.index, field, value)
        return self._persist(record, composer)

    def toggle_superset(self, draft_id: str, index: int) -> DraftOut:
        record, composer = self._load(draft_id)
        with _composer_errors():
            composer.toggle_superset(index)
        return self._persist(record, composer)

    def reorder(self, dto: DraftReorderIn) -> DraftOut:
        record, composer = self._load(dto.draft_id)
        with _composer_errors():
            composer.reorder(dto.from_index, dto.to_index)
        return self._persist(record, composer)

    # ------------------------------------------------------------------ #
    # Save
    # ------------------------------------------------------------------ #

    def save(self, dto: DraftSaveIn) -> DraftSaveOut:
        """
        Store the draft as a routine and close the session.

        Superset groups are normalized before serializing. On any failure the
        draft stays untouched so the client can fix the input and retry.

        :returns: The stored routine and whether it was created.
        :rtype: DraftSaveOut
        """
        record, composer = self._load(dto.draft_id)
        composer.normalize_supersets()
        routine, created = RoutineCommandService(ctx=self.ctx).save_composition(
            RoutineCompositionIn(
                owner_user_id=record.owner_id,
                name=dto.name,
                category=dto.category,
                description=dto.description,
                records=composer.serialize(),
                routine_id=record.routine_id,
            )
        )
        self.store.delete(record.draft_id)
        logger.info(
            "Routine draft saved",
            extra={
                "draft_id": record.draft_id,
                "routine_id": routine.id,
                "routine_created": created,
            },
        )
        return DraftSaveOut(routine=routine, created=created)
