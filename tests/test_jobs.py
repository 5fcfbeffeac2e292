"""
tests/test_jobs.py — Job Board Search & Applications
=====================================================
"""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from digital_bhutan.database.models import Job
from digital_bhutan.services import business_service, job_service
from digital_bhutan.services.errors import BusinessNotFound, JobNotFound


def _post(engine, user_id: int, title: str, category: str, level: str = "Mid Level"):
    return job_service.create_job(
        engine,
        posted_by=user_id,
        title=title,
        description=f"{title} role",
        category=category,
        experience_level=level,
        location="Thimphu",
        employment_type="full-time",
        skills=["dzongkha"],
    )


@pytest.fixture
def board(db_engine, user):
    """Three active jobs and one closed one."""
    _post(db_engine, user.id, "Backend Developer", "Technology", "Senior Level")
    _post(db_engine, user.id, "Frontend Developer", "Technology", "Entry Level")
    _post(db_engine, user.id, "Trekking Guide", "Tourism", "Entry Level")
    closed = _post(db_engine, user.id, "Data Engineer", "Technology")
    with Session(db_engine) as session:
        session.get(Job, closed.id).is_active = False
        session.commit()
    return db_engine


def _titles(engine, **filters) -> list[str]:
    with Session(engine) as session:
        return sorted(j.title for j in job_service.search_jobs(session, **filters))


class TestSearchJobs:
    def test_no_filters_returns_all_active(self, board):
        assert _titles(board) == ["Backend Developer", "Frontend Developer", "Trekking Guide"]

    def test_category(self, board):
        assert _titles(board, category="Technology") == ["Backend Developer", "Frontend Developer"]

    @pytest.mark.parametrize("category", ["", "All Categories", None])
    def test_category_sentinels_do_not_filter(self, board, category):
        assert len(_titles(board, category=category)) == 3

    def test_experience_level(self, board):
        assert _titles(board, experience_level="Entry Level") == [
            "Frontend Developer",
            "Trekking Guide",
        ]

    def test_any_experience_sentinel(self, board):
        assert len(_titles(board, experience_level="Any Experience")) == 3

    def test_keywords_case_insensitive_title_match(self, board):
        assert _titles(board, keywords="developer") == ["Backend Developer", "Frontend Developer"]

    def test_filters_combine(self, board):
        assert _titles(
            board, category="Technology", experience_level="Entry Level", keywords="front"
        ) == ["Frontend Developer"]

    def test_newest_first(self, board):
        with Session(board) as session:
            ids = [j.id for j in job_service.search_jobs(session)]
        assert ids == sorted(ids, reverse=True)


class TestJobDetail:
    def test_linked_to_business(self, db_engine, user):
        business = business_service.create_business(
            db_engine,
            owner_id=user.id,
            name="Druk Weaves",
            description="Hand-loomed textiles",
            category="Textiles",
        )
        job = job_service.create_job(
            db_engine,
            posted_by=user.id,
            business_id=business.id,
            title="Weaver",
            description="Loom work",
            category="Crafts",
            experience_level="Entry Level",
            location="Bumthang",
            employment_type="part-time",
        )
        assert job.business_id == business.id
        assert job.skills == []

    def test_unknown_business(self, db_engine, user):
        with pytest.raises(BusinessNotFound):
            job_service.create_job(
                db_engine,
                posted_by=user.id,
                business_id=999,
                title="Weaver",
                description="Loom work",
                category="Crafts",
                experience_level="Entry Level",
                location="Bumthang",
                employment_type="part-time",
            )
        with Session(db_engine) as session:
            assert job_service.search_jobs(session) == []

    def test_get_job(self, db_engine, user):
        job = _post(db_engine, user.id, "Weaver", "Crafts")
        with Session(db_engine) as session:
            fetched = job_service.get_job(session, job.id)
        assert fetched.skills == ["dzongkha"]

    def test_missing_job(self, db_session):
        with pytest.raises(JobNotFound):
            job_service.get_job(db_session, 42)


class TestApplications:
    def test_apply_and_list(self, db_engine, user):
        job = _post(db_engine, user.id, "Weaver", "Crafts")
        application = job_service.apply_to_job(
            db_engine, job_id=job.id, applicant_id=user.id, cover_letter="I weave kira."
        )
        assert application.status == "pending"

        with Session(db_engine) as session:
            for_job = job_service.list_applications_for_job(session, job.id)
            for_user = job_service.list_applications_for_user(session, user.id)
        assert [a.id for a in for_job] == [application.id]
        assert [a.id for a in for_user] == [application.id]

    def test_apply_to_unknown_job(self, db_engine, user):
        with pytest.raises(JobNotFound):
            job_service.apply_to_job(db_engine, job_id=5, applicant_id=user.id)
