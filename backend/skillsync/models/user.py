from sqlalchemy import JSON, Column, ForeignKey, Table, Text
from skillsync.database import Base
from skillsync.models.enums import Role, RoleType
from skillsync.utils.file_refs import FileRefType

saved_jobs = Table(
    "saved_jobs",
    Base.metadata,
    Column("user_id", Text, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("job_id", Text, primary_key=True),
    Column("saved_at", Text, nullable=False),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(RoleType, nullable=False, default=Role.CANDIDATE)
    skills = Column(JSON, nullable=False, default=list)
    bio = Column(Text)
    avatar = Column(FileRefType)
    resume = Column(FileRefType)
    created_at = Column(Text, nullable=False)
