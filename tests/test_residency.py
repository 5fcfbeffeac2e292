"""
tests/test_residency.py — e-Residency Review Flow
==================================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.database.models import AdminLog, ResidencyApplication, User
from digital_bhutan.services import residency_service
from digital_bhutan.services.errors import ApplicationNotFound, InvalidStatus, UserNotFound


def _apply(engine, user_id: int):
    return residency_service.create_application(
        engine,
        user_id=user_id,
        first_name="Tashi",
        last_name="Dorji",
        email="tashi@example.bt",
        country_of_origin="Nepal",
        reason_for_residency="Remote software work from Thimphu",
    )


class TestCreateApplication:
    def test_starts_pending(self, db_engine, user):
        application = _apply(db_engine, user.id)
        assert application.status == "pending"
        assert application.reviewed_by is None

    def test_unknown_user(self, db_engine):
        with pytest.raises(UserNotFound):
            _apply(db_engine, 404)

    def test_listing(self, db_engine, user):
        first = _apply(db_engine, user.id)
        second = _apply(db_engine, user.id)
        with Session(db_engine) as session:
            ids = [a.id for a in residency_service.list_applications(session)]
            mine = residency_service.list_for_user(session, user.id)
        assert ids == [second.id, first.id]
        assert len(mine) == 2


class TestUpdateStatus:
    def test_approval_makes_user_resident(self, db_engine, user):
        application = _apply(db_engine, user.id)
        updated = residency_service.update_status(db_engine, application.id, "approved", user.id)

        assert updated.status == "approved"
        assert updated.reviewed_by == user.id
        assert updated.reviewed_at is not None
        with Session(db_engine) as session:
            assert session.get(User, user.id).is_digital_resident is True

    def test_rejection_leaves_flag_untouched(self, db_engine, user):
        approved = _apply(db_engine, user.id)
        second = _apply(db_engine, user.id)
        residency_service.update_status(db_engine, approved.id, "approved", user.id)
        updated = residency_service.update_status(db_engine, second.id, "rejected", user.id)

        assert updated.status == "rejected"
        with Session(db_engine) as session:
            assert session.get(User, user.id).is_digital_resident is True

    def test_rejection_of_non_resident(self, db_engine, user):
        application = _apply(db_engine, user.id)
        residency_service.update_status(db_engine, application.id, "rejected", user.id)
        with Session(db_engine) as session:
            assert session.get(User, user.id).is_digital_resident is False

    def test_unknown_reviewer(self, db_engine, user):
        application = _apply(db_engine, user.id)
        with pytest.raises(UserNotFound):
            residency_service.update_status(db_engine, application.id, "approved", 999)

        with Session(db_engine) as session:
            assert session.get(ResidencyApplication, application.id).status == "pending"
            assert session.get(User, user.id).is_digital_resident is False
            assert session.scalars(select(AdminLog)).all() == []

    def test_invalid_status(self, db_engine, user):
        application = _apply(db_engine, user.id)
        with pytest.raises(InvalidStatus):
            residency_service.update_status(db_engine, application.id, "maybe", user.id)

    def test_unknown_application(self, db_engine, user):
        with pytest.raises(ApplicationNotFound):
            residency_service.update_status(db_engine, 999, "approved", user.id)

    def test_transition_is_audited(self, db_engine, user):
        application = _apply(db_engine, user.id)
        residency_service.update_status(db_engine, application.id, "approved", user.id)

        with Session(db_engine) as session:
            (entry,) = session.scalars(select(AdminLog)).all()
        assert entry.target_table == "residency_applications"
        assert entry.target_id == str(application.id)
        assert entry.before_snapshot["status"] == "pending"
        assert entry.after_snapshot["status"] == "approved"
