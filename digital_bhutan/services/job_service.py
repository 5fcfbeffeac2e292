"""
digital_bhutan.services.job_service — Job Board
================================================

Postings, filtered search and applications.  The search filters mirror
the job board's select boxes: an empty value or the "All Categories" /
"Any Experience" sentinel means "don't filter".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.orm import Session

from digital_bhutan.constants import ALL_CATEGORIES, ANY_EXPERIENCE
from digital_bhutan.database.engine import get_session
from digital_bhutan.database.models import Business, Job, JobApplication
from digital_bhutan.services.errors import BusinessNotFound, JobNotFound
from digital_bhutan.services.user_service import require_user

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


def _is_filter(value: str | None, sentinel: str) -> bool:
    return bool(value and value.strip()) and value != sentinel


# ---------------------------------------------------------------------------
# Postings
# ---------------------------------------------------------------------------
def create_job(
    engine: Engine,
    *,
    posted_by: int,
    title: str,
    description: str,
    category: str,
    experience_level: str,
    location: str,
    employment_type: str,
    skills: list[str] | None = None,
    business_id: int | None = None,
) -> Job:
    with get_session(engine) as session:
        require_user(session, posted_by)
        if business_id is not None and session.get(Business, business_id) is None:
            raise BusinessNotFound(business_id)
        job = Job(
            posted_by=posted_by,
            business_id=business_id,
            title=title,
            description=description,
            category=category,
            experience_level=experience_level,
            location=location,
            employment_type=employment_type,
            skills=list(skills or []),
        )
        session.add(job)
        session.flush()
        session.refresh(job)

    logger.info("Job %d (%s) posted by user %d", job.id, title, posted_by)
    return job


def search_jobs(
    session: Session,
    category: str | None = None,
    experience_level: str | None = None,
    keywords: str | None = None,
) -> list[Job]:
    """Active jobs matching every supplied filter, newest first.

    *keywords* is a case-insensitive substring match on the title.
    """
    query = select(Job).where(Job.is_active.is_(True))
    if _is_filter(category, ALL_CATEGORIES):
        query = query.where(Job.category == category)
    if _is_filter(experience_level, ANY_EXPERIENCE):
        query = query.where(Job.experience_level == experience_level)
    if keywords and keywords.strip():
        query = query.where(Job.title.ilike(f"%{keywords.strip()}%"))
    return list(session.scalars(
        query.order_by(Job.created_at.desc(), Job.id.desc())
    ).all())


def get_job(session: Session, job_id: int) -> Job:
    job = session.get(Job, job_id)
    if job is None:
        raise JobNotFound(job_id)
    return job


# ---------------------------------------------------------------------------
# Applications
# ---------------------------------------------------------------------------
def apply_to_job(
    engine: Engine,
    *,
    job_id: int,
    applicant_id: int,
    cover_letter: str | None = None,
    resume_url: str | None = None,
) -> JobApplication:
    with get_session(engine) as session:
        get_job(session, job_id)
        require_user(session, applicant_id)
        application = JobApplication(
            job_id=job_id,
            applicant_id=applicant_id,
            cover_letter=cover_letter,
            resume_url=resume_url,
        )
        session.add(application)
        session.flush()
        session.refresh(application)

    logger.info("User %d applied to job %d", applicant_id, job_id)
    return application


def list_applications_for_job(session: Session, job_id: int) -> list[JobApplication]:
    get_job(session, job_id)
    return list(session.scalars(
        select(JobApplication)
        .where(JobApplication.job_id == job_id)
        .order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
    ).all())


def list_applications_for_user(session: Session, user_id: int) -> list[JobApplication]:
    return list(session.scalars(
        select(JobApplication)
        .where(JobApplication.applicant_id == user_id)
        .order_by(JobApplication.applied_at.desc(), JobApplication.id.desc())
    ).all())
