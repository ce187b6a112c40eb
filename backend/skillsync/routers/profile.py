from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from skillsync.database import get_db
from skillsync.dependencies import Identity, get_identity
from skillsync.models.user import User
from skillsync.schemas.common import split_skills
from skillsync.schemas.user import UserResponse
from skillsync.services.match_service import normalize_skills
from skillsync.services.storage_service import IMAGE_EXTENSIONS, RESUME_EXTENSIONS, delete_local, save_upload
from skillsync.utils.file_refs import public_url

router = APIRouter(prefix="/profile", tags=["profile"])


def _user_to_response(user: User) -> UserResponse:
    skills = user.skills if isinstance(user.skills, list) else []
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        skills=[s for s in skills if isinstance(s, str)],
        bio=user.bio,
        avatar=public_url(user.avatar),
        resume=public_url(user.resume),
        created_at=user.created_at,
    )


def _load_user(db: Session, identity: Identity) -> User:
    user = db.query(User).filter(User.id == identity.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=UserResponse)
async def get_profile(identity: Identity = Depends(get_identity), db: Session = Depends(get_db)):
    return _user_to_response(_load_user(db, identity))


@router.put("", response_model=UserResponse)
async def update_profile(
    name: str | None = Form(None),
    bio: str | None = Form(None),
    skills: str | None = Form(None),
    avatar: UploadFile | None = File(None),
    resume: UploadFile | None = File(None),
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
):
    user = _load_user(db, identity)

    # Validate and store files before touching the record
    avatar_ref = await save_upload(avatar, "avatars", IMAGE_EXTENSIONS, "Avatar") if avatar and avatar.filename else None
    resume_ref = await save_upload(resume, "resumes", RESUME_EXTENSIONS, "Resume") if resume and resume.filename else None

    if name and name.strip():
        user.name = name.strip()
    if bio is not None:
        user.bio = bio
    if skills is not None:
        user.skills = split_skills(skills)
    replaced = []
    if avatar_ref:
        replaced.append(user.avatar)
        user.avatar = avatar_ref
    if resume_ref:
        replaced.append(user.resume)
        user.resume = resume_ref

    db.commit()
    db.refresh(user)

    for old_ref in replaced:
        delete_local(old_ref)
    return _user_to_response(user)


def user_skills(db: Session, user_id: str) -> list[str]:
    user = db.query(User).filter(User.id == user_id).first()
    return normalize_skills(user.skills) if user else []
