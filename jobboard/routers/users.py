import logging

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import get_current_user
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationResponse, ApplyRequest
from jobboard.schemas.common import ApiResponse
from jobboard.schemas.user import UserResponse
from jobboard.services.application_service import list_user_applications, submit_application
from jobboard.services.resume_service import update_resume

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/user", response_model=ApiResponse[UserResponse])
def get_user(user: User = Depends(get_current_user)):
    return ApiResponse(data=UserResponse.model_validate(user))


@router.post("/apply", response_model=ApiResponse[ApplicationResponse])
def apply(
    body: ApplyRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    application = submit_application(db, user, body.job_id)
    return ApiResponse(message="Applied successfully", data=ApplicationResponse.model_validate(application))


@router.get("/applications", response_model=ApiResponse[list[ApplicationResponse]])
def applications(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """The user's applications with job and company details, newest first."""
    rows = list_user_applications(db, user.id)
    return ApiResponse(data=[ApplicationResponse.model_validate(a) for a in rows])


@router.post("/update-resume", response_model=ApiResponse[UserResponse])
def update_user_resume(
    resume: UploadFile = File(..., description="Resume PDF file"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    updated = update_resume(db, user, resume.filename, resume.file.read())
    return ApiResponse(message="Resume updated", data=UserResponse.model_validate(updated))
