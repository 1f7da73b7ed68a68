"""Tests for the User model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from fitlog.models.user import ROLE_ADMIN, User


class TestUser:
    def test_email_normalized_and_unique(self, session):
        u1 = User(email="Alice@Example.com ", username="alice")
        session.add(u1)
        session.flush()
        assert u1.email == "alice@example.com"

        session.add(User(email="alice@example.com", username="alice2"))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_username_unique(self, session):
        session.add(User(email="b1@example.com", username="bob"))
        session.flush()

        session.add(User(email="b2@example.com", username="bob"))
        with pytest.raises(IntegrityError):
            session.flush()

    def test_malformed_email_rejected(self):
        with pytest.raises(ValueError):
            User(email="not-an-email", username="x")

    def test_role_defaults_to_member(self, session):
        u = User(email="m@example.com", username="member")
        session.add(u)
        session.flush()
        session.refresh(u)

        assert u.role == "MEMBER"
        assert u.is_admin is False

    def test_admin_flag(self):
        assert User(email="a@example.com", username="root", role=ROLE_ADMIN).is_admin is True
