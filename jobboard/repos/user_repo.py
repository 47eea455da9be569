import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.security import IdentityClaims
from jobboard.models.user import User

logger = logging.getLogger(__name__)


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, user_id: str, name: str, email: str | None) -> User:
    user = User(id=user_id, name=name, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_provision(db: Session, claims: IdentityClaims) -> User:
    """Return the local user for verified claims, creating it on first sight."""
    user = get_by_id(db, claims.user_id)
    if user:
        return user
    name = claims.name or (claims.email.split("@")[0] if claims.email else "")
    try:
        user = create(db, claims.user_id, name, claims.email)
        logger.info("Provisioned user %s from identity token", claims.user_id)
        return user
    except IntegrityError:
        # A concurrent request provisioned the same subject first
        db.rollback()
        return get_by_id(db, claims.user_id)


def set_resume(db: Session, user_id: str, resume_url: str) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    user.resume_url = resume_url
    user.resume_updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
