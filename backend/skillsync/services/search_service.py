from sqlalchemy.orm import Session

from skillsync.models.job import Job
from skillsync.services.match_service import compute_match_percentage


def job_matches_term(job: Job, term: str | None) -> bool:
    """Case-insensitive substring match on title, company, location or any required skill."""
    if not term:
        return True
    needle = term.lower()
    fields = [job.title, job.company, job.location]
    skills = job.required_skills if isinstance(job.required_skills, list) else []
    fields.extend(s for s in skills if isinstance(s, str))
    return any(needle in f.lower() for f in fields if f)


def search_jobs(db: Session, term: str | None = None, limit: int | None = None) -> list[Job]:
    """Jobs matching ``term``, newest first."""
    jobs = db.query(Job).order_by(Job.posted_at.desc(), Job.id).all()
    results = [j for j in jobs if job_matches_term(j, term)]
    if limit is not None:
        results = results[:limit]
    return results


def recommend_jobs(db: Session, user_skills, term: str | None, limit: int) -> list[tuple[Job, int]]:
    """Newest matching jobs, each paired with the caller's match percentage."""
    return [
        (job, compute_match_percentage(user_skills, job.required_skills))
        for job in search_jobs(db, term, limit)
    ]
