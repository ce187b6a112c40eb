from skillsync.models.user import User, saved_jobs
from skillsync.models.job import Job
from skillsync.models.application import Application
from skillsync.models.company import Company
from skillsync.models.enums import ApplicationStatus, Role

__all__ = ["User", "saved_jobs", "Job", "Application", "Company", "ApplicationStatus", "Role"]
