from pydantic import BaseModel

from skillsync.schemas.user import ApplicantSummary


class ApplicationResponse(BaseModel):
    id: str
    user_id: str
    job_id: str
    job_title: str
    company: str
    status: str
    resume: str | None
    applied_at: str


class MyApplicationResponse(ApplicationResponse):
    # Current job details; None once the job has been deleted
    location: str | None = None
    salary: str | None = None


class JobApplicationResponse(ApplicationResponse):
    applicant: ApplicantSummary | None = None


class ApplicationSubmitResponse(BaseModel):
    message: str
    application: ApplicationResponse


class ApplicationStatusUpdate(BaseModel):
    status: str
