from pydantic import BaseModel


class CompanyResponse(BaseModel):
    id: str
    name: str
    location: str
    website: str | None
    description: str | None
    logo: str | None
    recruiter_id: str
    created_at: str
