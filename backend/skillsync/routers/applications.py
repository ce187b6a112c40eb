import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillsync.database import get_db
from skillsync.dependencies import Identity, get_identity, require_candidate
from skillsync.models.application import Application
from skillsync.models.enums import ApplicationStatus
from skillsync.models.job import Job
from skillsync.models.user import User
from skillsync.routers.jobs import get_job_or_404
from skillsync.schemas.application import (
    ApplicationResponse,
    ApplicationStatusUpdate,
    ApplicationSubmitResponse,
    JobApplicationResponse,
    MyApplicationResponse,
)
from skillsync.schemas.common import MessageResponse
from skillsync.schemas.user import ApplicantSummary
from skillsync.services.notification_service import send_email, status_email
from skillsync.services.storage_service import RESUME_EXTENSIONS, delete_local, save_upload
from skillsync.utils.file_refs import public_url
from skillsync.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["applications"])


def _application_fields(app: Application) -> dict:
    return dict(
        id=app.id,
        user_id=app.user_id,
        job_id=app.job_id,
        job_title=app.job_title,
        company=app.company,
        status=app.status.value,
        resume=public_url(app.resume),
        applied_at=app.applied_at,
    )


def _application_to_response(app: Application) -> ApplicationResponse:
    return ApplicationResponse(**_application_fields(app))


def _get_application_or_404(db: Session, application_id: str) -> Application:
    app = db.query(Application).filter(Application.id == application_id).first()
    if not app:
        raise HTTPException(status_code=404, detail="Application not found")
    return app


@router.post("/apply", response_model=ApplicationSubmitResponse, status_code=201)
async def apply(
    job_id: str = Form(...),
    resume: UploadFile | None = File(None),
    identity: Identity = Depends(require_candidate),
    db: Session = Depends(get_db),
):
    if resume is None or not resume.filename:
        raise HTTPException(status_code=400, detail="Please upload a resume")
    job = get_job_or_404(db, job_id)

    resume_ref = await save_upload(resume, "resumes", RESUME_EXTENSIONS, "Resume")

    application = Application(
        id=str(uuid.uuid4()),
        user_id=identity.user_id,
        job_id=job.id,
        job_title=job.title,
        company=job.company,
        status=ApplicationStatus.APPLIED,
        resume=resume_ref,
        applied_at=utc_now(),
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        # UNIQUE(user_id, job_id) rejected a second application
        db.rollback()
        delete_local(resume_ref)
        raise HTTPException(status_code=409, detail="You have already applied for this job")
    db.refresh(application)
    logger.info("User %s applied to job %s", identity.user_id, job.id)

    return ApplicationSubmitResponse(
        message="Application submitted successfully",
        application=_application_to_response(application),
    )


@router.get("/applications", response_model=list[MyApplicationResponse])
async def my_applications(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    rows = (
        db.query(Application, Job)
        .outerjoin(Job, Job.id == Application.job_id)
        .filter(Application.user_id == identity.user_id)
        .order_by(Application.applied_at.desc())
        .all()
    )
    return [
        MyApplicationResponse(
            **_application_fields(app),
            location=job.location if job else None,
            salary=job.salary if job else None,
        )
        for app, job in rows
    ]


@router.get("/jobs/{job_id}/applications", response_model=list[JobApplicationResponse])
async def job_applications(job_id: str, identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    job = get_job_or_404(db, job_id)
    if not identity.can_manage(job.posted_by):
        raise HTTPException(status_code=403, detail="User not authorized to view these applications")

    rows = (
        db.query(Application, User)
        .outerjoin(User, User.id == Application.user_id)
        .filter(Application.job_id == job_id)
        .order_by(Application.applied_at.desc())
        .all()
    )
    results = []
    for app, user in rows:
        applicant = None
        if user:
            skills = user.skills if isinstance(user.skills, list) else []
            applicant = ApplicantSummary(id=user.id, name=user.name, email=user.email, skills=skills)
        results.append(JobApplicationResponse(**_application_fields(app), applicant=applicant))
    return results


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    req: ApplicationStatusUpdate,
    background_tasks: BackgroundTasks,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    try:
        target = ApplicationStatus(req.status)
    except ValueError:
        valid = ", ".join(s.value for s in ApplicationStatus)
        raise HTTPException(status_code=400, detail=f"Invalid status. Must be one of: {valid}")

    application = _get_application_or_404(db, application_id)
    job = db.query(Job).filter(Job.id == application.job_id).first()
    owner_id = job.posted_by if job else None
    if not identity.can_manage(owner_id):
        raise HTTPException(status_code=403, detail="User not authorized to update this application")

    if not application.status.can_transition_to(target):
        raise HTTPException(
            status_code=409,
            detail=f"Cannot change status from {application.status.value} to {target.value}",
        )

    application.status = target
    db.commit()
    db.refresh(application)
    logger.info("Application %s marked %s by %s", application.id, target.value, identity.user_id)

    applicant = db.query(User).filter(User.id == application.user_id).first()
    if applicant and applicant.email:
        message = status_email(applicant.email, application.job_title, application.company, target)
        if message:
            background_tasks.add_task(send_email, *message)

    return _application_to_response(application)


@router.delete("/applications/{application_id}", response_model=MessageResponse)
async def withdraw_application(
    application_id: str,
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    application = _get_application_or_404(db, application_id)
    if not identity.can_manage(application.user_id):
        raise HTTPException(status_code=403, detail="User not authorized to withdraw this application")
    db.delete(application)
    db.commit()
    return MessageResponse(message="Application withdrawn")
