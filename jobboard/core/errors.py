"""
Typed failures raised by services and request dependencies.

Each error carries a stable ``code`` and the HTTP status the API answers with.
The handlers in ``jobboard.main`` render them as ``{success: false, message, code}``.
"""
from fastapi import status


class JobBoardError(Exception):
    code = "Error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(JobBoardError):
    code = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(JobBoardError):
    code = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed"


class NotFoundError(JobBoardError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class DuplicateApplicationError(JobBoardError):
    code = "DuplicateApplication"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already applied for this job"


class AlreadyRegisteredError(JobBoardError):
    code = "AlreadyRegistered"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Company already registered"


class InvalidTransitionError(JobBoardError):
    code = "InvalidTransition"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Application status can no longer be changed"


class InvalidStatusError(JobBoardError):
    code = "InvalidStatus"
    default_message = "Invalid application status"


class ResumeRequiredError(JobBoardError):
    code = "ResumeRequired"
    default_message = "Upload a resume before applying"


class InvalidFileError(JobBoardError):
    code = "InvalidFile"
    default_message = "Invalid file"

    def __init__(self, message: str | None = None, *, too_large: bool = False):
        super().__init__(message)
        if too_large:
            self.status_code = 413


class UploadFailedError(JobBoardError):
    code = "UploadFailed"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "File upload failed"


class InvalidFieldsError(JobBoardError):
    code = "ValidationError"
    status_code = 422
    default_message = "Invalid request fields"
