from pydantic import BaseModel, field_validator

from skillsync.schemas.common import SkillList
from skillsync.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    skills: SkillList = []
    role: str | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@") or any(c.isspace() for c in v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("name")
    @classmethod
    def _require_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
