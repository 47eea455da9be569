import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobboard.config import settings
from jobboard.core.errors import JobBoardError
from jobboard.core.rate_limiter import rate_limiter
from jobboard.database import init_db, engine
from jobboard.logging_config import setup_logging
from jobboard.routers import company, jobs, users
from jobboard.schemas.common import ApiResponse

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"

app = FastAPI(
    title="Job Board API",
    description="Company job postings, public job search, applications and resumes.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(company.router)
app.include_router(jobs.router)
app.include_router(users.router)


def _error(status_code: int, message: str, code: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "code": code},
        headers=headers,
    )


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request, exc: JobBoardError):
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return _error(exc.status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return _error(422, message, "ValidationError")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail), "HTTPError", headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, "Internal server error", "InternalError")


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS":
        return await call_next(request)

    client_ip = request.client.host if request.client else "unknown"
    limit = None
    window = 60
    if path in {"/company/login", "/company/register"}:
        limit = settings.rate_limit_auth_per_min
    elif path == "/users/apply":
        limit = settings.rate_limit_apply_per_min

    if limit is not None and limit > 0:
        key = f"{client_ip}:{path}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=window)
        if not allowed:
            return _error(
                429,
                "Too many requests. Please retry shortly.",
                "RateLimited",
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live", response_model=ApiResponse[dict])
def health_live():
    return ApiResponse(data={"status": "ok"})


@app.get("/health/ready", response_model=ApiResponse[dict])
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return ApiResponse(data={"status": "ready"})
    except Exception:
        logger.exception("Readiness check failed")
        return _error(503, "Database unavailable", "NotReady")


@app.on_event("startup")
def on_startup():
    logger.info("Starting Job Board API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
        if settings.identity_jwt_key.startswith("replace-with"):
            raise RuntimeError("IDENTITY_JWT_KEY must be set in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
        if settings.identity_jwt_key.startswith("replace-with"):
            logger.warning("IDENTITY_JWT_KEY is not set; applicant requests will be rejected.")
    init_db()


@app.get("/")
def root():
    return ApiResponse(message="Job Board API. Browse visible jobs at /jobs.")
