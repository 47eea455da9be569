from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    app_env: str = "development"  # development, staging, production

    # External identity service (end-user bearer tokens).
    # HS* algorithms take the shared secret, RS*/ES* the PEM public key.
    identity_jwt_key: str = "replace-with-identity-verification-key"
    identity_jwt_algorithm: str = "RS256"
    identity_issuer: str | None = None
    identity_audience: str | None = None

    # Object storage for company logos and resumes
    aws_region: str = "us-west-2"
    storage_bucket: str = "jobboard-uploads"
    storage_endpoint_url: str | None = None
    # Public URL prefix for stored objects; defaults to the bucket's S3 URL
    storage_public_base_url: str | None = None

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:5173"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Public job listing page size
    jobs_page_size: int = 6

    # Upload and request guards
    max_resume_upload_mb: int = 5
    max_logo_upload_mb: int = 2
    rate_limit_auth_per_min: int = 20
    rate_limit_apply_per_min: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
