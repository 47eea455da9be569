import logging

from sqlalchemy.orm import Session

from jobboard.core.errors import NotFoundError
from jobboard.models.user import User
from jobboard.repos import user_repo
from jobboard.services import storage

logger = logging.getLogger(__name__)


def update_resume(db: Session, user: User, filename: str | None, content: bytes) -> User:
    """Store the uploaded PDF and point the user's resume at it."""
    url = storage.upload_resume(user.id, filename, content)
    updated = user_repo.set_resume(db, user.id, url)
    if not updated:
        raise NotFoundError("User not found")
    logger.info("Resume updated for user %s", user.id)
    return updated
