from sqlalchemy import Column, Text, UniqueConstraint
from skillsync.database import Base
from skillsync.models.enums import ApplicationStatus, StatusType
from skillsync.utils.file_refs import FileRefType


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (UniqueConstraint("user_id", "job_id"),)

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False)
    job_id = Column(Text, nullable=False)
    # Snapshot of the job at submission time
    job_title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    status = Column(StatusType, nullable=False, default=ApplicationStatus.APPLIED)
    resume = Column(FileRefType)
    applied_at = Column(Text, nullable=False)
