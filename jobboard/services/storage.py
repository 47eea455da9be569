"""
Object storage for company logos and applicant resumes.

Uploads go to an S3-compatible bucket; callers get back the public URL.
Files are checked before upload: size, declared type and magic bytes.
"""
import logging
from functools import lru_cache
from pathlib import Path

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from jobboard.config import settings
from jobboard.core.errors import InvalidFileError, UploadFailedError
from jobboard.core.security import generate_id

logger = logging.getLogger(__name__)

IMAGE_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
_IMAGE_SIGNATURES = (b"\x89PNG\r\n\x1a\n", b"\xff\xd8\xff", b"GIF87a", b"GIF89a")


@lru_cache(maxsize=1)
def _s3_client():
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        endpoint_url=settings.storage_endpoint_url or None,
    )


def public_url(key: str) -> str:
    base = settings.storage_public_base_url
    if base:
        return f"{base.rstrip('/')}/{key}"
    return f"https://{settings.storage_bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"


def _check_size(content: bytes, max_mb: int) -> None:
    if not content:
        raise InvalidFileError("File is empty")
    if len(content) > max_mb * 1024 * 1024:
        raise InvalidFileError(f"File too large. Max allowed is {max_mb}MB.", too_large=True)


def _is_image(content: bytes) -> bool:
    if content.startswith(_IMAGE_SIGNATURES):
        return True
    return content[:4] == b"RIFF" and content[8:12] == b"WEBP"


def validate_resume(filename: str | None, content: bytes) -> None:
    if not filename or not filename.lower().endswith(".pdf"):
        raise InvalidFileError("Resume must be a PDF (.pdf)")
    _check_size(content, settings.max_resume_upload_mb)
    # Magic bytes check rejects disguised uploads
    if not content.startswith(b"%PDF"):
        raise InvalidFileError("Invalid PDF file content.")


def validate_logo(content_type: str | None, content: bytes) -> str:
    """Return the file extension to store the logo under."""
    ext = IMAGE_TYPES.get((content_type or "").lower())
    if not ext:
        raise InvalidFileError("Logo must be a PNG, JPEG, WEBP or GIF image")
    _check_size(content, settings.max_logo_upload_mb)
    if not _is_image(content):
        raise InvalidFileError("Invalid image file content.")
    return ext


def upload(content: bytes, key: str, content_type: str) -> str:
    try:
        _s3_client().put_object(
            Bucket=settings.storage_bucket,
            Key=key,
            Body=content,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as e:
        logger.exception("Upload of %s to bucket %s failed: %s", key, settings.storage_bucket, e)
        raise UploadFailedError() from e
    logger.info("Stored %s (%d bytes)", key, len(content))
    return public_url(key)


def upload_resume(user_id: str, filename: str | None, content: bytes) -> str:
    validate_resume(filename, content)
    stem = Path(filename).stem[:80] or "resume"
    key = f"resumes/{user_id}/{generate_id()}-{stem}.pdf"
    return upload(content, key, "application/pdf")


def upload_logo(content_type: str | None, content: bytes) -> str:
    ext = validate_logo(content_type, content)
    key = f"logos/{generate_id()}{ext}"
    return upload(content, key, content_type.lower())


def discard(url: str) -> None:
    """Best-effort removal of an object uploaded by this service, given its public URL."""
    prefix = public_url("")
    if not url.startswith(prefix):
        logger.warning("Not discarding %s: outside %s", url, prefix)
        return
    key = url[len(prefix):]
    try:
        _s3_client().delete_object(Bucket=settings.storage_bucket, Key=key)
    except (BotoCoreError, ClientError) as e:
        logger.exception("Failed to discard %s from bucket %s: %s", key, settings.storage_bucket, e)
        return
    logger.info("Discarded %s", key)
