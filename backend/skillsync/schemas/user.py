from pydantic import BaseModel


class UserSummary(BaseModel):
    id: str
    name: str
    email: str


class ApplicantSummary(UserSummary):
    skills: list[str] = []


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    skills: list[str]
    bio: str | None
    avatar: str | None
    resume: str | None
    created_at: str
