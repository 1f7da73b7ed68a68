from __future__ import annotations

import pytest

from fitlog.services._shared.dto import PaginationIn
from fitlog.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    InvalidOperationError,
    NotFoundError,
)
from fitlog.services.exercises import ExerciseCatalogService, ExerciseCreateIn, ExerciseListIn
from fitlog.services.exercises.service import slugify
from tests.factories.exercise import ExerciseFactory
from tests.factories.user import UserFactory


def _create_in(**overrides) -> ExerciseCreateIn:
    data = {"name": "Barbell Bench Press", "muscle_group": "CHEST", "equipment": "BARBELL"}
    data.update(overrides)
    return ExerciseCreateIn(**data)


class TestExerciseCatalogService:
    """Validate ExerciseCatalogService behaviours for the catalog."""

    def test_slugify(self):
        assert slugify("  Barbell Bench-Press (flat) ") == "barbell-bench-press-flat"
        assert slugify("***") == ""

    def test_member_creates_custom_exercise(self, session, ctx_for):
        member = UserFactory()
        session.commit()

        out = ExerciseCatalogService(ctx=ctx_for(member)).create(_create_in(category="PUSH"))

        assert out.is_custom is True
        assert out.owner_user_id == member.id
        assert out.slug == f"barbell-bench-press-u{member.id}"
        assert out.category == "PUSH"

    def test_admin_creates_global_exercise(self, session, ctx_for):
        admin = UserFactory(admin=True)
        session.commit()

        out = ExerciseCatalogService(ctx=ctx_for(admin)).create(_create_in())

        assert out.is_custom is False
        assert out.owner_user_id is None
        assert out.slug == "barbell-bench-press"

    def test_duplicate_slug_conflicts(self, session, ctx_for):
        admin = UserFactory(admin=True)
        ExerciseFactory(slug="bench")
        session.commit()

        with pytest.raises(ConflictError):
            ExerciseCatalogService(ctx=ctx_for(admin)).create(_create_in(slug="bench"))

    def test_name_without_letters_is_rejected(self, session, ctx_for):
        admin = UserFactory(admin=True)
        session.commit()

        with pytest.raises(InvalidOperationError):
            ExerciseCatalogService(ctx=ctx_for(admin)).create(_create_in(name="!!!"))

    def test_unknown_actor_cannot_create(self, session):
        with pytest.raises(AuthorizationError):
            ExerciseCatalogService().create(_create_in())

    def test_get_hides_other_users_custom_exercise(self, session, ctx_for):
        me, other = UserFactory(), UserFactory()
        theirs = ExerciseFactory(custom=True, owner=other)
        session.commit()

        with pytest.raises(NotFoundError):
            ExerciseCatalogService(ctx=ctx_for(me)).get(theirs.id)
        assert ExerciseCatalogService(ctx=ctx_for(other)).get(theirs.id).id == theirs.id

    def test_list_searches_visible_catalog(self, session, ctx_for):
        me, other = UserFactory(), UserFactory()
        ExerciseFactory(name="Incline Press", muscle_group="CHEST")
        ExerciseFactory(name="Leg Press", muscle_group="LEGS")
        ExerciseFactory(name="My Press", custom=True, owner=me, muscle_group="CHEST")
        ExerciseFactory(name="Their Press", custom=True, owner=other, muscle_group="CHEST")
        session.commit()

        service = ExerciseCatalogService(ctx=ctx_for(me))
        out = service.list(ExerciseListIn(search="press", muscle_group="CHEST"))

        assert [e.name for e in out.items] == ["Incline Press", "My Press"]
        assert out.meta.total == 2

        paged = service.list(ExerciseListIn(pagination=PaginationIn(page=2, limit=1), search="press"))
        assert len(paged.items) == 1
        assert paged.meta.has_prev is True
