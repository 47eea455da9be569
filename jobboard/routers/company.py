import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import AlreadyRegisteredError, InvalidFieldsError, JobBoardError, UnauthenticatedError
from jobboard.core.security import create_access_token, verify_password
from jobboard.database import get_db
from jobboard.dependencies import get_current_company
from jobboard.models.company import Company
from jobboard.models.job_application import JobApplication
from jobboard.repos.company_repo import (
    create as create_company,
    get_by_email,
    update_profile as update_company_profile,
)
from jobboard.schemas.application import ApplicantResponse, ApplicationResponse, StatusChangeRequest
from jobboard.schemas.common import ApiResponse
from jobboard.schemas.company import CompanyLogin, CompanyRegister, CompanyResponse, CompanySession
from jobboard.schemas.job import JobCreate, JobResponse, VisibilityToggle
from jobboard.services.application_service import change_application_status, list_company_applicants
from jobboard.services.job_service import list_company_jobs, post_job, toggle_job_visibility
from jobboard.services.storage import discard as discard_upload, upload_logo

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/company", tags=["company"])


def _session(company: Company) -> CompanySession:
    return CompanySession(
        token=create_access_token(company.id),
        company=CompanyResponse.model_validate(company),
    )


def _applicant_to_response(a: JobApplication) -> ApplicantResponse:
    return ApplicantResponse(
        id=a.id,
        status=a.status,
        applied_at=a.applied_at,
        updated_at=a.updated_at,
        job_id=a.job_id,
        job_title=a.job.title,
        job_location=a.job.location,
        user_id=a.user_id,
        user_name=a.user.name if a.user else "",
        user_email=a.user.email if a.user else None,
        resume_url=a.user.resume_url if a.user else None,
    )


@router.post("/register", response_model=ApiResponse[CompanySession])
def register(
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    image: UploadFile | None = File(None, description="Company logo"),
    db: Session = Depends(get_db),
):
    try:
        data = CompanyRegister(name=name, email=email, password=password)
    except ValidationError as e:
        raise InvalidFieldsError(e.errors()[0]["msg"]) from e
    if image is None:
        raise InvalidFieldsError("Company logo is required")
    try:
        if get_by_email(db, data.email):
            raise AlreadyRegisteredError()
        logo_url = upload_logo(image.content_type, image.file.read())
        try:
            company = create_company(db, data.name, data.email, data.password, logo_url)
        except IntegrityError as e:
            # Email claimed by a concurrent registration after the lookup
            db.rollback()
            discard_upload(logo_url)
            raise AlreadyRegisteredError() from e
        except Exception:
            discard_upload(logo_url)
            raise
        logger.info("Company registered: %s", company.email)
        return ApiResponse(message=f"Welcome {company.name}", data=_session(company))
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Register failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Registration failed") from e


@router.post("/login", response_model=ApiResponse[CompanySession])
def login(data: CompanyLogin, db: Session = Depends(get_db)):
    try:
        company = get_by_email(db, data.email)
        if not company or not verify_password(data.password, company.password_hash):
            raise UnauthenticatedError("Invalid email or password")
        logger.info("Company logged in: %s", company.email)
        return ApiResponse(data=_session(company))
    except JobBoardError:
        raise
    except Exception as e:
        logger.exception("Login failed for email=%s: %s", data.email, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.get("/company", response_model=ApiResponse[CompanyResponse])
def get_company(company: Company = Depends(get_current_company)):
    return ApiResponse(data=CompanyResponse.model_validate(company))


@router.post("/update-profile", response_model=ApiResponse[CompanyResponse])
def update_profile(
    name: str | None = Form(None),
    image: UploadFile | None = File(None),
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    """Change the company's own name and/or logo."""
    if name is not None and not name.strip():
        raise InvalidFieldsError("Company name must not be empty")
    logo_url = upload_logo(image.content_type, image.file.read()) if image is not None else None
    updated = update_company_profile(
        db,
        company.id,
        name=name.strip() if name is not None else None,
        logo_url=logo_url,
    )
    logger.info("Company profile updated: %s", company.id)
    return ApiResponse(message="Profile updated", data=CompanyResponse.model_validate(updated))


@router.post("/post-job", response_model=ApiResponse[JobResponse])
def post_new_job(
    data: JobCreate,
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    job = post_job(db, company.id, data)
    return ApiResponse(message="Job added", data=JobResponse.model_validate(job))


@router.get("/list-jobs", response_model=ApiResponse[list[JobResponse]])
def list_jobs(
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    """The company's jobs, visible or not, newest first, with applicant counts."""
    jobs = list_company_jobs(db, company.id)
    return ApiResponse(data=[JobResponse.model_validate(j) for j in jobs])


@router.post("/change-visiblity", response_model=ApiResponse[JobResponse])
@router.post("/change-visibility", response_model=ApiResponse[JobResponse], include_in_schema=False)
def change_visibility(
    body: VisibilityToggle,
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    job = toggle_job_visibility(db, body.id, company.id)
    return ApiResponse(message="Visibility changed", data=JobResponse.model_validate(job))


@router.get("/applicants", response_model=ApiResponse[list[ApplicantResponse]])
def applicants(
    job_id: str | None = None,
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    """Applications to this company's jobs, optionally for one job, newest first."""
    rows = list_company_applicants(db, company.id, job_id=job_id)
    logger.debug("GET /company/applicants company=%s job=%s count=%d", company.id, job_id, len(rows))
    return ApiResponse(data=[_applicant_to_response(a) for a in rows])


@router.post("/change-status", response_model=ApiResponse[ApplicationResponse])
def change_status(
    body: StatusChangeRequest,
    db: Session = Depends(get_db),
    company: Company = Depends(get_current_company),
):
    application = change_application_status(db, company.id, body.id, body.status)
    return ApiResponse(message="Status changed", data=ApplicationResponse.model_validate(application))
