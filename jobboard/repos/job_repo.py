from datetime import datetime, timezone

from sqlalchemy import func, not_
from sqlalchemy.orm import Session, joinedload

from jobboard.core.security import generate_id
from jobboard.models.job import Job
from jobboard.models.job_application import JobApplication


def create(
    db: Session,
    company_id: str,
    *,
    title: str,
    description_html: str,
    location: str,
    category: str,
    level: str,
    salary: int | None = None,
) -> Job:
    job = Job(
        id=generate_id(),
        company_id=company_id,
        title=title,
        description_html=description_html,
        location=location,
        category=category,
        level=level,
        salary=salary,
        visible=True,
        posted_at=datetime.now(timezone.utc),
        applicant_count=0,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get_by_id(db: Session, job_id: str) -> Job | None:
    return (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.id == job_id)
        .first()
    )


def list_visible(db: Session) -> list[Job]:
    """Every visible job across companies, newest first."""
    return (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.visible.is_(True))
        .order_by(Job.posted_at.desc(), Job.created_at.desc())
        .all()
    )


def list_by_company(db: Session, company_id: str) -> list[Job]:
    return (
        db.query(Job)
        .filter(Job.company_id == company_id)
        .order_by(Job.posted_at.desc(), Job.created_at.desc())
        .all()
    )


def toggle_visibility(db: Session, job_id: str, company_id: str) -> Job | None:
    """
    Flip ``visible`` in one UPDATE scoped to the owning company.
    Returns None when no row matched.
    """
    updated = (
        db.query(Job)
        .filter(Job.id == job_id, Job.company_id == company_id)
        .update({Job.visible: not_(Job.visible)}, synchronize_session=False)
    )
    db.commit()
    if not updated:
        return None
    job = get_by_id(db, job_id)
    db.refresh(job)
    return job


def recount_applicants(db: Session) -> int:
    """Recompute every job's cached applicant count from application rows. Returns jobs corrected."""
    counts = dict(
        db.query(JobApplication.job_id, func.count(JobApplication.id))
        .group_by(JobApplication.job_id)
        .all()
    )
    corrected = 0
    for job in db.query(Job).all():
        actual = counts.get(job.id, 0)
        if job.applicant_count != actual:
            job.applicant_count = actual
            corrected += 1
    if corrected:
        db.commit()
    return corrected
