import logging

from sqlalchemy.orm import Session

from jobboard.core.errors import ForbiddenError, NotFoundError
from jobboard.models.job import Job
from jobboard.repos import job_repo
from jobboard.schemas.job import JobCreate

logger = logging.getLogger(__name__)


def post_job(db: Session, company_id: str, data: JobCreate) -> Job:
    job = job_repo.create(
        db,
        company_id,
        title=data.title,
        description_html=data.description,
        location=data.location,
        category=data.category,
        level=data.level,
        salary=data.salary,
    )
    logger.info("Job posted: company=%s job=%s title=%r", company_id, job.id, job.title)
    return job


def list_public_jobs(db: Session) -> list[Job]:
    return job_repo.list_visible(db)


def get_public_job(db: Session, job_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job or not job.visible:
        raise NotFoundError("Job not found")
    return job


def list_company_jobs(db: Session, company_id: str) -> list[Job]:
    return job_repo.list_by_company(db, company_id)


def toggle_job_visibility(db: Session, job_id: str, company_id: str) -> Job:
    job = job_repo.get_by_id(db, job_id)
    if not job:
        raise NotFoundError("Job not found")
    if job.company_id != company_id:
        logger.info("Visibility change refused: company=%s does not own job=%s", company_id, job_id)
        raise ForbiddenError("You can only change your own jobs")
    toggled = job_repo.toggle_visibility(db, job_id, company_id)
    if toggled is None:
        raise NotFoundError("Job not found")
    logger.info("Job visibility changed: job=%s visible=%s", job_id, toggled.visible)
    return toggled
