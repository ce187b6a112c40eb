import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from skillsync.config import settings
from skillsync.database import get_db
from skillsync.dependencies import Identity, get_identity, require_recruiter
from skillsync.models.application import Application
from skillsync.models.enums import ApplicationStatus
from skillsync.models.job import Job
from skillsync.models.user import User, saved_jobs
from skillsync.routers.profile import user_skills
from skillsync.schemas.common import MessageResponse
from skillsync.schemas.job import (
    JobCreate,
    JobDetailResponse,
    JobResponse,
    JobUpdate,
    PostedJobResponse,
    RecommendedJobResponse,
    SaveToggleResponse,
    StatsResponse,
)
from skillsync.schemas.user import UserSummary
from skillsync.services.search_service import recommend_jobs, search_jobs
from skillsync.services.seed_service import seed_jobs_if_empty
from skillsync.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["jobs"])


def _job_fields(job: Job) -> dict:
    skills = job.required_skills if isinstance(job.required_skills, list) else []
    return dict(
        id=job.id,
        title=job.title,
        company=job.company,
        location=job.location,
        salary=job.salary,
        description=job.description,
        required_skills=[s for s in skills if isinstance(s, str)],
        posted_by=job.posted_by,
        posted_at=job.posted_at,
    )


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(**_job_fields(job))


def get_job_or_404(db: Session, job_id: str) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def _get_owned_job(db: Session, job_id: str, identity: Identity) -> Job:
    job = get_job_or_404(db, job_id)
    if not identity.can_manage(job.posted_by):
        raise HTTPException(status_code=403, detail="User not authorized to modify this job")
    return job


# ---------------------------------------------------------------------------
# Feeds
# ---------------------------------------------------------------------------

@router.get("/recommendations", response_model=list[RecommendedJobResponse])
async def recommendations(
    search: str | None = None,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    seed_jobs_if_empty(db)
    skills = user_skills(db, identity.user_id)
    return [
        RecommendedJobResponse(**_job_fields(job), match_percentage=pct)
        for job, pct in recommend_jobs(db, skills, search, settings.recommendation_limit)
    ]


@router.get("/public-jobs", response_model=list[JobResponse])
async def public_jobs(search: str | None = None, db: Session = Depends(get_db)):
    seed_jobs_if_empty(db)
    has_term = bool(search)
    limit = settings.public_search_limit if has_term else settings.public_feed_limit
    return [_job_to_response(j) for j in search_jobs(db, search, limit)]


@router.get("/stats", response_model=StatsResponse)
async def stats(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    total_jobs = db.query(func.count(Job.id)).scalar()
    mine = db.query(func.count(Application.id)).filter(Application.user_id == identity.user_id)
    accepted = mine.filter(Application.status == ApplicationStatus.ACCEPTED)
    return StatsResponse(
        total_jobs=total_jobs,
        my_applications=mine.scalar(),
        accepted_applications=accepted.scalar(),
    )


@router.get("/my-posted-jobs", response_model=list[PostedJobResponse])
async def my_posted_jobs(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    jobs = (
        db.query(Job)
        .filter(Job.posted_by == identity.user_id)
        .order_by(Job.posted_at.desc())
        .all()
    )
    counts = dict(
        db.query(Application.job_id, func.count(Application.id))
        .filter(Application.job_id.in_([j.id for j in jobs]))
        .group_by(Application.job_id)
        .all()
    )
    return [PostedJobResponse(**_job_fields(j), total_applied=counts.get(j.id, 0)) for j in jobs]


# ---------------------------------------------------------------------------
# Saved jobs
# ---------------------------------------------------------------------------

@router.put("/jobs/{job_id}/save", response_model=SaveToggleResponse)
async def toggle_saved_job(job_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    get_job_or_404(db, job_id)
    match = (saved_jobs.c.user_id == identity.user_id) & (saved_jobs.c.job_id == job_id)

    removed = db.execute(delete(saved_jobs).where(match)).rowcount
    if removed:
        db.commit()
        return SaveToggleResponse(message="Job removed", saved=False)

    db.execute(insert(saved_jobs).values(user_id=identity.user_id, job_id=job_id, saved_at=utc_now()))
    db.commit()
    return SaveToggleResponse(message="Job saved", saved=True)


@router.get("/saved-jobs", response_model=list[JobResponse])
async def list_saved_jobs(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    # Inner join drops saved ids whose job has since been deleted
    rows = db.execute(
        select(Job)
        .join(saved_jobs, saved_jobs.c.job_id == Job.id)
        .where(saved_jobs.c.user_id == identity.user_id)
        .order_by(saved_jobs.c.saved_at.desc())
    ).scalars().all()
    return [_job_to_response(j) for j in rows]


# ---------------------------------------------------------------------------
# Job CRUD
# ---------------------------------------------------------------------------

@router.post("/jobs", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, identity: Identity = Depends(require_recruiter), db: Session = Depends(get_db)):
    job = Job(
        id=str(uuid.uuid4()),
        title=req.title,
        company=req.company,
        location=req.location,
        salary=req.salary,
        description=req.description,
        required_skills=req.required_skills,
        posted_by=identity.user_id,
        posted_at=utc_now(),
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return _job_to_response(job)


@router.get("/jobs/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: str, _identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    job = get_job_or_404(db, job_id)
    poster = None
    if job.posted_by:
        user = db.query(User).filter(User.id == job.posted_by).first()
        if user:
            poster = UserSummary(id=user.id, name=user.name, email=user.email)
    return JobDetailResponse(**_job_fields(job), poster=poster)


@router.put("/jobs/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    req: JobUpdate,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    job = _get_owned_job(db, job_id, identity)

    update_data = req.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(job, key, value)

    db.commit()
    db.refresh(job)
    logger.info("Job %s updated by %s", job.id, identity.user_id)
    return _job_to_response(job)


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    job = _get_owned_job(db, job_id, identity)
    db.delete(job)
    db.commit()
    logger.info("Job %s deleted by %s", job_id, identity.user_id)
    return MessageResponse(message="Job removed")
