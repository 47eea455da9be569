from datetime import datetime

from pydantic import BaseModel

from jobboard.schemas.job import CompanySummary


class ApplyRequest(BaseModel):
    job_id: str

    class Config:
        extra = "forbid"


class StatusChangeRequest(BaseModel):
    id: str
    # Checked by the service so unknown values surface as InvalidStatus
    status: str

    class Config:
        extra = "forbid"


class AppliedJobSummary(BaseModel):
    id: str
    title: str
    location: str
    category: str
    level: str
    salary: int | None
    company: CompanySummary | None = None

    class Config:
        from_attributes = True


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    user_id: str
    status: str
    applied_at: datetime
    updated_at: datetime
    job: AppliedJobSummary | None = None

    class Config:
        from_attributes = True


class ApplicantResponse(BaseModel):
    id: str
    status: str
    applied_at: datetime
    updated_at: datetime
    job_id: str
    job_title: str
    job_location: str
    user_id: str
    user_name: str
    user_email: str | None
    resume_url: str | None
