from typing import Annotated

from pydantic import BaseModel, BeforeValidator


class MessageResponse(BaseModel):
    message: str


def split_skills(value):
    """Accept a list of skills or a comma-separated string."""
    if value is None:
        return value
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    if isinstance(value, (list, tuple)):
        return [str(s).strip() for s in value if str(s).strip()]
    return value


SkillList = Annotated[list[str], BeforeValidator(split_skills)]
