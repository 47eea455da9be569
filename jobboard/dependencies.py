import logging

from fastapi import Depends
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from jobboard.core.errors import UnauthenticatedError
from jobboard.core.security import decode_access_token, verify_identity_token
from jobboard.database import get_db
from jobboard.models.company import Company
from jobboard.models.user import User
from jobboard.repos import company_repo, user_repo

logger = logging.getLogger(__name__)
bearer = HTTPBearer(auto_error=False)
company_token_header = APIKeyHeader(name="token", auto_error=False)


def get_current_company(
    db: Session = Depends(get_db),
    token: str | None = Depends(company_token_header),
) -> Company:
    if not token:
        logger.info("Company auth failed: missing token header")
        raise UnauthenticatedError("Not authorized, login again")
    company_id = decode_access_token(token)
    if not company_id:
        logger.info("Company auth failed: invalid or expired token")
        raise UnauthenticatedError("Invalid or expired token")
    company = company_repo.get_by_id(db, company_id)
    if not company:
        logger.info("Company auth failed: company from token not found")
        raise UnauthenticatedError("Company not found")
    return company


def get_current_user(
    db: Session = Depends(get_db),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> User:
    """Resolve the applicant from the identity-service bearer token."""
    if not credentials:
        logger.info("User auth failed: missing bearer credentials")
        raise UnauthenticatedError()
    claims = verify_identity_token(credentials.credentials)
    if not claims:
        logger.info("User auth failed: invalid or expired identity token")
        raise UnauthenticatedError("Invalid or expired token")
    return user_repo.get_or_provision(db, claims)
