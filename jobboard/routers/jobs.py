import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.schemas.common import ApiResponse
from jobboard.schemas.job import JobPage, JobResponse
from jobboard.services.job_service import get_public_job, list_public_jobs
from jobboard.services.listing import JobFilter, filter_jobs, page_count, paginate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=ApiResponse[JobPage])
def get_jobs(
    category: list[str] = Query(default=[]),
    location: list[str] = Query(default=[]),
    title: str = "",
    search_location: str = "",
    page: int | None = Query(default=None, ge=1),
    db: Session = Depends(get_db),
):
    """
    Visible jobs from every company, newest first.
    category/location may repeat; they narrow by exact membership.
    title/search_location are case-insensitive substring searches.
    Without ``page`` the whole filtered list is returned.
    """
    criteria = JobFilter.build(category, location, title, search_location)
    jobs = filter_jobs(list_public_jobs(db), criteria)
    total = len(jobs)
    page_size = settings.jobs_page_size
    if page is not None:
        jobs = paginate(jobs, page, page_size)
    logger.debug("GET /jobs total=%d page=%s", total, page)
    return ApiResponse(
        data=JobPage(
            jobs=[JobResponse.model_validate(j) for j in jobs],
            total=total,
            page=page,
            pages=page_count(total, page_size) if page is not None else 1,
        )
    )


@router.get("/{job_id}", response_model=ApiResponse[JobResponse])
def get_job(job_id: str, db: Session = Depends(get_db)):
    job = get_public_job(db, job_id)
    return ApiResponse(data=JobResponse.model_validate(job))
