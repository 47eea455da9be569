from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.models.company import Company
from jobboard.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> Company | None:
    return db.query(Company).filter(func.lower(Company.email) == email.strip().lower()).first()


def get_by_id(db: Session, company_id: str) -> Company | None:
    return db.query(Company).filter(Company.id == company_id).first()


def create(db: Session, name: str, email: str, password: str, logo_url: str) -> Company:
    company = Company(
        id=generate_id(),
        name=name,
        email=email.strip().lower(),
        password_hash=hash_password(password),
        logo_url=logo_url,
    )
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


def update_profile(
    db: Session,
    company_id: str,
    *,
    name: str | None = None,
    logo_url: str | None = None,
) -> Company | None:
    company = get_by_id(db, company_id)
    if not company:
        return None
    if name is not None:
        company.name = name
    if logo_url is not None:
        company.logo_url = logo_url
    db.commit()
    db.refresh(company)
    return company
