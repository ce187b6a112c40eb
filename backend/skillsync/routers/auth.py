import logging
import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillsync.config import settings
from skillsync.database import get_db
from skillsync.models.enums import Role
from skillsync.models.user import User
from skillsync.routers.profile import _user_to_response
from skillsync.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from skillsync.services.notification_service import registration_email, send_email
from skillsync.utils.security import create_access_token, hash_password, verify_password
from skillsync.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

MIN_PASSWORD_LENGTH = 6


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(req: RegisterRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    try:
        role = Role.parse(req.role) if req.role else Role.CANDIDATE
    except ValueError:
        raise HTTPException(status_code=400, detail="Role must be candidate or recruiter")
    if role is Role.ADMIN and not settings.allow_admin_signup:
        raise HTTPException(status_code=400, detail="Cannot register as admin")
    if len(req.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    if db.query(User).filter(User.email == req.email).first():
        raise HTTPException(status_code=409, detail="User already exists")

    user = User(
        id=str(uuid.uuid4()),
        name=req.name,
        email=req.email,
        password_hash=hash_password(req.password),
        role=role,
        skills=req.skills,
        created_at=utc_now(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise HTTPException(status_code=409, detail="User already exists")
    db.refresh(user)
    logger.info("Registered %s user %s", user.role.value, user.id)

    background_tasks.add_task(send_email, *registration_email(user.name, user.email))
    return AuthResponse(token=create_access_token(user.id), user=_user_to_response(user))


@router.post("/login", response_model=AuthResponse)
async def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == req.email.strip().lower()).first()
    if not user or not verify_password(user.password_hash, req.password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    return AuthResponse(token=create_access_token(user.id), user=_user_to_response(user))
