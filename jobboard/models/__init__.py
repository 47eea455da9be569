from jobboard.models.company import Company
from jobboard.models.user import User
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication

__all__ = [
    "Company",
    "User",
    "Job",
    "JobApplication",
]
