from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from jobboard.core.constants import ApplicationStatus
from jobboard.core.security import generate_id
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication


def create(db: Session, user_id: str, job_id: str) -> JobApplication:
    """
    Insert a Pending application and resync the job's applicant count in the
    same transaction. Raises IntegrityError if (user_id, job_id) already exists.
    """
    now = datetime.now(timezone.utc)
    application = JobApplication(
        id=generate_id(),
        user_id=user_id,
        job_id=job_id,
        status=ApplicationStatus.PENDING.value,
        applied_at=now,
        updated_at=now,
    )
    db.add(application)
    db.flush()
    applicant_count = (
        select(func.count(JobApplication.id))
        .where(JobApplication.job_id == job_id)
        .scalar_subquery()
    )
    db.query(Job).filter(Job.id == job_id).update(
        {Job.applicant_count: applicant_count}, synchronize_session=False
    )
    db.commit()
    db.refresh(application)
    return application


def get_by_id(db: Session, application_id: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .options(joinedload(JobApplication.job))
        .filter(JobApplication.id == application_id)
        .first()
    )


def get_for_user_job(db: Session, user_id: str, job_id: str) -> JobApplication | None:
    return (
        db.query(JobApplication)
        .filter(
            JobApplication.user_id == user_id,
            JobApplication.job_id == job_id,
        )
        .first()
    )


def list_for_user(db: Session, user_id: str) -> list[JobApplication]:
    return (
        db.query(JobApplication)
        .options(joinedload(JobApplication.job).joinedload(Job.company))
        .filter(JobApplication.user_id == user_id)
        .order_by(JobApplication.applied_at.desc())
        .all()
    )


def list_for_company(
    db: Session,
    company_id: str,
    job_id: str | None = None,
) -> list[JobApplication]:
    q = (
        db.query(JobApplication)
        .join(Job, JobApplication.job_id == Job.id)
        .options(joinedload(JobApplication.job), joinedload(JobApplication.user))
        .filter(Job.company_id == company_id)
    )
    if job_id:
        q = q.filter(JobApplication.job_id == job_id)
    return q.order_by(JobApplication.applied_at.desc()).all()


def transition_from_pending(db: Session, application_id: str, new_status: str) -> bool:
    """
    Set ``status`` only if the row is still Pending.
    Returns False when another decision already landed.
    """
    updated = (
        db.query(JobApplication)
        .filter(
            JobApplication.id == application_id,
            JobApplication.status == ApplicationStatus.PENDING.value,
        )
        .update(
            {
                JobApplication.status: new_status,
                JobApplication.updated_at: datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return bool(updated)
