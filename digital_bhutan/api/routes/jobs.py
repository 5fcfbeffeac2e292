"""
digital_bhutan.api.routes.jobs — Job board endpoints
=====================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from digital_bhutan.api.deps import acting_user_id, get_config, get_engine, get_session
from digital_bhutan.api.schemas import JobApply, JobCreate
from digital_bhutan.api.serializers import job_application_dict, job_dict
from digital_bhutan.config import PlatformConfig
from digital_bhutan.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("")
def create_job(
    body: JobCreate,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    job = job_service.create_job(
        engine,
        posted_by=acting_user_id(body.posted_by, cfg),
        business_id=body.business_id,
        title=body.title,
        description=body.description,
        category=body.category,
        experience_level=body.experience_level,
        location=body.location,
        employment_type=body.employment_type,
        skills=body.skills,
    )
    return job_dict(job)


@router.get("")
def search_jobs(
    category: str | None = Query(None),
    experience_level: str | None = Query(None, alias="experienceLevel"),
    keywords: str | None = Query(None),
    session: Session = Depends(get_session),
):
    """Active jobs; every filter is optional."""
    jobs = job_service.search_jobs(
        session,
        category=category,
        experience_level=experience_level,
        keywords=keywords,
    )
    return [job_dict(j) for j in jobs]


@router.get("/{job_id}")
def get_job(job_id: int, session: Session = Depends(get_session)):
    return job_dict(job_service.get_job(session, job_id))


@router.post("/{job_id}/apply")
def apply_to_job(
    job_id: int,
    body: JobApply,
    engine=Depends(get_engine),
    cfg: PlatformConfig = Depends(get_config),
):
    application = job_service.apply_to_job(
        engine,
        job_id=job_id,
        applicant_id=acting_user_id(body.applicant_id, cfg),
        cover_letter=body.cover_letter,
        resume_url=body.resume_url,
    )
    return job_application_dict(application)


@router.get("/{job_id}/applications")
def list_applications(job_id: int, session: Session = Depends(get_session)):
    return [
        job_application_dict(a)
        for a in job_service.list_applications_for_job(session, job_id)
    ]
