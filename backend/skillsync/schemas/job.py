from pydantic import BaseModel

from skillsync.schemas.common import SkillList
from skillsync.schemas.user import UserSummary


class JobCreate(BaseModel):
    title: str
    company: str
    location: str
    salary: str
    description: str
    required_skills: SkillList = []


class JobUpdate(BaseModel):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    salary: str | None = None
    description: str | None = None
    required_skills: SkillList | None = None


class JobResponse(BaseModel):
    id: str
    title: str
    company: str
    location: str
    salary: str
    description: str
    required_skills: list[str]
    posted_by: str | None
    posted_at: str


class JobDetailResponse(JobResponse):
    poster: UserSummary | None = None


class RecommendedJobResponse(JobResponse):
    match_percentage: int


class PostedJobResponse(JobResponse):
    total_applied: int = 0


class SaveToggleResponse(BaseModel):
    message: str
    saved: bool


class StatsResponse(BaseModel):
    total_jobs: int
    my_applications: int
    accepted_applications: int
