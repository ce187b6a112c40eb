from enum import Enum

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator


class Role(str, Enum):
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """Resolve a role label, folding the legacy ``user`` label into candidate."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid role: {value!r}")
        label = value.strip().lower()
        if label == "user":
            return cls.CANDIDATE
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Invalid role: {value!r}") from None


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"

    def can_transition_to(self, target: "ApplicationStatus") -> bool:
        return self is ApplicationStatus.APPLIED and target in (
            ApplicationStatus.ACCEPTED,
            ApplicationStatus.REJECTED,
        )


class RoleType(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return Role.parse(value).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Role.parse(value)


class StatusType(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ApplicationStatus(value).value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return ApplicationStatus(value)
