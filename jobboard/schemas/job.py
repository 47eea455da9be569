from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from jobboard.core.constants import JOB_CATEGORIES, JOB_LEVELS, JOB_LOCATIONS


class JobCreate(BaseModel):
    title: str = Field(max_length=200)
    description: str = Field(max_length=50000)
    location: str
    category: str
    level: str
    salary: int | None = Field(default=None, ge=0)

    class Config:
        extra = "forbid"

    @field_validator("title", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("category")
    @classmethod
    def known_category(cls, v: str) -> str:
        if v not in JOB_CATEGORIES:
            raise ValueError(f"category must be one of: {', '.join(JOB_CATEGORIES)}")
        return v

    @field_validator("location")
    @classmethod
    def known_location(cls, v: str) -> str:
        if v not in JOB_LOCATIONS:
            raise ValueError(f"location must be one of: {', '.join(JOB_LOCATIONS)}")
        return v

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        if v not in JOB_LEVELS:
            raise ValueError(f"level must be one of: {', '.join(JOB_LEVELS)}")
        return v


class VisibilityToggle(BaseModel):
    id: str

    class Config:
        extra = "forbid"


class CompanySummary(BaseModel):
    id: str
    name: str
    logo_url: str

    class Config:
        from_attributes = True


class JobResponse(BaseModel):
    id: str
    title: str
    description_html: str
    location: str
    category: str
    level: str
    salary: int | None
    visible: bool
    posted_at: datetime
    applicant_count: int = 0
    company: CompanySummary | None = None

    class Config:
        from_attributes = True


class JobPage(BaseModel):
    jobs: list[JobResponse]
    total: int
    page: int | None = None
    pages: int = 1
