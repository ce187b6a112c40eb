from sqlalchemy import Column, Text
from skillsync.database import Base
from skillsync.utils.file_refs import FileRefType


class Company(Base):
    __tablename__ = "companies"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    location = Column(Text, nullable=False)
    website = Column(Text)
    description = Column(Text)
    logo = Column(FileRefType)
    recruiter_id = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
