from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    name: str
    email: str | None
    resume_url: str | None = None
    resume_updated_at: datetime | None = None

    class Config:
        from_attributes = True
