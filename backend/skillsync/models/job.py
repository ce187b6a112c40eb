from sqlalchemy import JSON, Column, Text
from skillsync.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    salary = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    required_skills = Column(JSON, nullable=False, default=list)
    # Plain id, no constraint: jobs outlive the recruiter who posted them.
    posted_by = Column(Text)
    posted_at = Column(Text, nullable=False)
