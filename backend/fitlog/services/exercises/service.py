# comments in English; strict reST docstrings
from __future__ import annotations

import logging
import re

from sqlalchemy.exc import IntegrityError

from fitlog.models.exercise import Exercise
from fitlog.repositories.exercise import ExerciseRepository
from fitlog.services._shared.base import BaseService
from fitlog.services._shared.errors import (
    ConflictError,
    InvalidOperationError,
    NotFoundError,
    violates,
)
from fitlog.services.exercises.dto import (
    ExerciseCreateIn,
    ExerciseListIn,
    ExerciseListOut,
    ExerciseRowOut,
)

logger = logging.getLogger(__name__)

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase ``value`` and collapse every non-alphanumeric run to ``-``.

    >>> slugify("  Barbell Bench-Press (flat) ")
    'barbell-bench-press-flat'
    """
    return _SLUG_STRIP.sub("-", value.strip().lower()).strip("-")


class ExerciseCatalogService(BaseService):
    """
    Application service for the **exercise catalog** routines draw from.

    Notes
    -----
    - An actor sees the global catalog plus their own custom exercises;
      anything else behaves as missing (:class:`NotFoundError`).
    - Derived slugs of custom exercises carry a ``-u<owner_id>`` suffix so
      they never collide with global entries of the same name.
    - Unique slug violations are translated to :class:`ConflictError`.
    """

    # ------------------------------------------------------------------ #
    # Create
    # ------------------------------------------------------------------ #

    def create(self, dto: ExerciseCreateIn) -> ExerciseRowOut:
        """
        Create an exercise owned by the actor (or a global one for admins).

        :param dto: Creation DTO.
        :type dto: :class:`ExerciseCreateIn`
        :returns: Persisted row as output projection.
        :rtype: :class:`ExerciseRowOut`
        :raises ConflictError: When the slug is already taken.
        :raises AuthorizationError: When the actor is unknown.
        """
        try:
            with self.rw_uow() as uow:
                actor_id = self.require_actor(uow)
                is_global = self.actor_is_admin(uow)
                repo: ExerciseRepository = uow.exercises

                slug = slugify(dto.slug or dto.name)
                if not dto.slug and not is_global:
                    slug = f"{slug}-u{actor_id}"
                if not slug:
                    raise InvalidOperationError("Exercise name must contain letters or digits.")
                if repo.get_by_slug(slug) is not None:
                    raise ConflictError("Exercise", "slug already exists")

                row = Exercise(
                    name=dto.name.strip(),
                    slug=slug,
                    category=dto.category,
                    muscle_group=dto.muscle_group,
                    equipment=dto.equipment,
                    description=(dto.description.strip() if dto.description else None),
                    is_custom=not is_global,
                    owner_user_id=None if is_global else actor_id,
                )
                repo.add(row)
                logger.info(
                    "Exercise created",
                    extra={"exercise_id": row.id, "is_custom": row.is_custom},
                )
                return self._to_row_out(row)
        except IntegrityError as ie:
            if violates(ie, "uq_exercises_slug") or violates(ie, "exercises.slug"):
                raise ConflictError("Exercise", "slug already exists") from ie
            raise ConflictError("Exercise", "conflict") from ie

    # ------------------------------------------------------------------ #
    # Read
    # ------------------------------------------------------------------ #

    def get(self, exercise_id: int) -> ExerciseRowOut:
        """
        Retrieve one exercise visible to the actor.

        :raises NotFoundError: When the id does not exist or is hidden.
        """
        with self.ro_uow() as uow:
            row = uow.exercises.get_visible(exercise_id, self.ctx.actor_id)
            if row is None:
                raise NotFoundError("Exercise", exercise_id)
            return self._to_row_out(row)

    def list(self, dto: ExerciseListIn) -> ExerciseListOut:
        """
        Search the catalog visible to the actor.

        Results are ordered by name unless ``pagination.sort`` says otherwise.

        :param dto: Search and paging parameters.
        :type dto: :class:`ExerciseListIn`
        :rtype: :class:`ExerciseListOut`
        """
        pagination = self.ensure_pagination(
            page=dto.pagination.page, limit=dto.pagination.limit, sort=dto.pagination.sort
        )
        filters = {
            key: value
            for key, value in (
                ("muscle_group", dto.muscle_group),
                ("equipment", dto.equipment),
                ("category", dto.category),
            )
            if value is not None
        }
        with self.ro_uow() as uow:
            page = uow.exercises.paginate_visible(
                self.ctx.actor_id, pagination, search=dto.search, filters=filters
            )
            return ExerciseListOut(
                items=[self._to_row_out(r) for r in page.items],
                meta=self.page_meta(page),
            )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_row_out(row: Exercise) -> ExerciseRowOut:
        return ExerciseRowOut(
            id=row.id,
            name=row.name,
            slug=row.slug,
            category=row.category,
            muscle_group=row.muscle_group,
            equipment=row.equipment,
            description=row.description,
            is_custom=bool(row.is_custom),
            owner_user_id=row.owner_user_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
