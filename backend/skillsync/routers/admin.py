import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from skillsync.database import get_db
from skillsync.dependencies import Identity, require_admin
from skillsync.models.job import Job
from skillsync.models.user import User
from skillsync.routers.jobs import _job_fields
from skillsync.routers.profile import _user_to_response
from skillsync.schemas.common import MessageResponse
from skillsync.schemas.job import JobDetailResponse
from skillsync.schemas.user import UserResponse, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/users", response_model=list[UserResponse])
async def list_users(db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.created_at.desc()).all()
    return [_user_to_response(u) for u in users]


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, identity: Identity = Depends(require_admin), db: Session = Depends(get_db)):
    if user_id == identity.user_id:
        raise HTTPException(status_code=400, detail="Admins cannot delete their own account")
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    # Jobs, applications and companies of the user are left in place
    db.delete(user)
    db.commit()
    logger.info("User %s deleted by admin %s", user_id, identity.user_id)
    return MessageResponse(message="User deleted")


@router.get("/jobs", response_model=list[JobDetailResponse])
async def list_all_jobs(db: Session = Depends(get_db)):
    rows = (
        db.query(Job, User)
        .outerjoin(User, User.id == Job.posted_by)
        .order_by(Job.posted_at.desc())
        .all()
    )
    return [
        JobDetailResponse(
            **_job_fields(job),
            poster=UserSummary(id=user.id, name=user.name, email=user.email) if user else None,
        )
        for job, user in rows
    ]
