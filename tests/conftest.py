import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("IDENTITY_JWT_KEY", "test-identity-key")
os.environ.setdefault("IDENTITY_JWT_ALGORITHM", "HS256")

from dataclasses import dataclass  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import jobboard.models  # noqa: E402,F401
from jobboard.core.rate_limiter import rate_limiter  # noqa: E402
from jobboard.database import Base, get_db  # noqa: E402
from jobboard.dependencies import get_current_company, get_current_user  # noqa: E402
from jobboard.main import app  # noqa: E402
from jobboard.repos import company_repo, job_repo, user_repo  # noqa: E402


@dataclass
class StubCompany:
    id: str = "company-1"
    name: str = "Acme"
    email: str = "hr@acme.example.com"
    logo_url: str = "https://cdn.test/logos/acme.png"
    password_hash: str = "hashed-password"


@dataclass
class StubUser:
    id: str = "user-1"
    name: str = "Jane Doe"
    email: str | None = "jane@example.com"
    resume_url: str | None = "https://cdn.test/resumes/jane.pdf"
    resume_updated_at: object | None = None


@pytest.fixture(autouse=True)
def _reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def stub_company() -> StubCompany:
    return StubCompany()


@pytest.fixture
def stub_user() -> StubUser:
    return StubUser()


@pytest.fixture
def client(stub_company: StubCompany):
    """Client authenticated as a company; repo/service calls are monkeypatched per test."""
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_company] = lambda: stub_company
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user_client(stub_user: StubUser):
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    app.dependency_overrides[get_current_user] = lambda: stub_user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client():
    def _db_override():
        yield object()

    app.dependency_overrides[get_db] = _db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def db_session():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def make_company(db_session):
    counter = {"n": 0}

    def _make(name: str = "Acme", email: str | None = None, password: str = "password123"):
        counter["n"] += 1
        email = email or f"hr{counter['n']}@company.example.com"
        return company_repo.create(db_session, name, email, password, "https://cdn.test/logo.png")

    return _make


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(resume_url: str | None = "https://cdn.test/resumes/cv.pdf", user_id: str | None = None):
        counter["n"] += 1
        user = user_repo.create(
            db_session,
            user_id or f"idp|user{counter['n']}",
            f"User {counter['n']}",
            f"user{counter['n']}@example.com",
        )
        if resume_url:
            user = user_repo.set_resume(db_session, user.id, resume_url)
        return user

    return _make


@pytest.fixture
def make_job(db_session):
    def _make(company, **fields):
        values = {
            "title": "Backend Engineer",
            "description_html": "<p>Build APIs</p>",
            "location": "Bangalore",
            "category": "Programming",
            "level": "Senior level",
            "salary": 120000,
        }
        values.update(fields)
        return job_repo.create(db_session, company.id, **values)

    return _make
