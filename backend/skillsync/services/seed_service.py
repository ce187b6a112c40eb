import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillsync.models.enums import Role
from skillsync.models.job import Job
from skillsync.models.user import User
from skillsync.utils.timestamps import TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)

SAMPLE_JOBS = [
    {"title": "Software Engineer III", "company": "Google", "location": "Bangalore",
     "salary": "₹35L - ₹50L", "description": "Google Cloud infra.",
     "required_skills": ["Go", "Kubernetes", "Distributed Systems"]},
    {"title": "Frontend Developer", "company": "Netflix", "location": "Remote",
     "salary": "₹45L", "description": "Netflix TV UI.",
     "required_skills": ["React", "JavaScript", "Performance"]},
    {"title": "SDE-2 (Backend)", "company": "Amazon", "location": "Hyderabad",
     "salary": "₹38L", "description": "Amazon Pay systems.",
     "required_skills": ["Java", "DynamoDB", "AWS"]},
    {"title": "Product Designer", "company": "Airbnb", "location": "Remote",
     "salary": "₹25L", "description": "Design experiences.",
     "required_skills": ["Figma", "UI/UX"]},
    {"title": "Full Stack Engineer", "company": "Zomato", "location": "Gurugram",
     "salary": "₹22L", "description": "Order systems.",
     "required_skills": ["Node.js", "React", "MongoDB"]},
    {"title": "Data Scientist", "company": "Microsoft", "location": "Bangalore",
     "salary": "₹40L", "description": "Azure AI.",
     "required_skills": ["Python", "PyTorch", "Azure"]},
]


def _seed_owner(db: Session) -> str | None:
    owner = db.query(User).filter(User.role == Role.ADMIN).order_by(User.created_at).first()
    if owner is None:
        owner = db.query(User).order_by(User.created_at).first()
    return owner.id if owner else None


def seed_jobs_if_empty(db: Session) -> bool:
    """Insert the sample jobs when the board has none. Returns True if it seeded."""
    if db.query(func.count(Job.id)).scalar():
        return False

    owner_id = _seed_owner(db)
    now = datetime.now(timezone.utc)
    # Stagger timestamps so the feed order matches SAMPLE_JOBS order
    for offset, sample in enumerate(SAMPLE_JOBS):
        posted_at = (now - timedelta(seconds=offset)).strftime(TIMESTAMP_FORMAT)
        db.add(Job(
            id=str(uuid.uuid4()),
            posted_by=owner_id,
            posted_at=posted_at,
            **sample,
        ))
    db.commit()
    logger.info("Seeded %d sample jobs (owner=%s)", len(SAMPLE_JOBS), owner_id)
    return True
