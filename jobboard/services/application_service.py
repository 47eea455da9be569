"""
Application lifecycle.

An application starts Pending. The owning company may move it once to one of
the decision statuses; after that its status is fixed.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.constants import ApplicationStatus, DECISION_STATUSES
from jobboard.core.errors import (
    DuplicateApplicationError,
    ForbiddenError,
    InvalidStatusError,
    InvalidTransitionError,
    NotFoundError,
    ResumeRequiredError,
)
from jobboard.models.job_application import JobApplication
from jobboard.models.user import User
from jobboard.repos import application_repo, job_repo

logger = logging.getLogger(__name__)


def submit_application(db: Session, user: User, job_id: str) -> JobApplication:
    if not user.resume_url:
        raise ResumeRequiredError()
    job = job_repo.get_by_id(db, job_id)
    if not job or not job.visible:
        raise NotFoundError("Job not found")
    if application_repo.get_for_user_job(db, user.id, job_id):
        raise DuplicateApplicationError()
    try:
        application = application_repo.create(db, user.id, job_id)
    except IntegrityError as e:
        # Lost the race to a concurrent apply; the unique constraint decided
        db.rollback()
        raise DuplicateApplicationError() from e
    logger.info("Application submitted: user=%s job=%s application=%s", user.id, job_id, application.id)
    return application


def change_application_status(
    db: Session,
    company_id: str,
    application_id: str,
    new_status: str,
) -> JobApplication:
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")
    if application.job.company_id != company_id:
        logger.info(
            "Status change refused: company=%s does not own application=%s", company_id, application_id
        )
        raise ForbiddenError("You can only manage applications to your own jobs")
    if application.status != ApplicationStatus.PENDING.value:
        raise InvalidTransitionError(f"Application is already {application.status}")
    if new_status not in DECISION_STATUSES:
        raise InvalidStatusError(f"Status must be one of: {', '.join(sorted(DECISION_STATUSES))}")
    if not application_repo.transition_from_pending(db, application_id, new_status):
        raise InvalidTransitionError("Application was already decided")
    db.refresh(application)
    logger.info("Application status changed: application=%s status=%s", application_id, new_status)
    return application


def list_user_applications(db: Session, user_id: str) -> list[JobApplication]:
    return application_repo.list_for_user(db, user_id)


def list_company_applicants(
    db: Session,
    company_id: str,
    job_id: str | None = None,
) -> list[JobApplication]:
    if job_id:
        job = job_repo.get_by_id(db, job_id)
        if not job:
            raise NotFoundError("Job not found")
        if job.company_id != company_id:
            raise ForbiddenError("You can only view applicants to your own jobs")
    return application_repo.list_for_company(db, company_id, job_id=job_id)
