import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from jobboard.config import settings


@dataclass(frozen=True)
class IdentityClaims:
    """Verified end-user identity taken from an identity-service token."""

    user_id: str
    email: str | None = None
    name: str | None = None


def _prehash(password: str) -> bytes:
    """Pre-hash to avoid bcrypt's 72-byte limit."""
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prehash(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_prehash(plain), hashed.encode())


def create_access_token(subject: str) -> str:
    """Company session token. Clients treat it as opaque and send it in the ``token`` header."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {"sub": subject, "exp": expire, "kind": "company"}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> str | None:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("kind") != "company":
        return None
    return payload.get("sub")


def verify_identity_token(token: str) -> IdentityClaims | None:
    """
    Verify a bearer token issued by the external identity service.
    Returns None for malformed, expired or wrongly signed tokens.
    """
    try:
        payload = jwt.decode(
            token,
            settings.identity_jwt_key,
            algorithms=[settings.identity_jwt_algorithm],
            audience=settings.identity_audience,
            issuer=settings.identity_issuer,
            options={"verify_aud": settings.identity_audience is not None},
        )
    except JWTError:
        return None
    subject = payload.get("sub")
    if not subject:
        return None
    name = payload.get("name")
    if not name:
        parts = [payload.get("given_name"), payload.get("family_name")]
        name = " ".join(p for p in parts if p) or None
    return IdentityClaims(user_id=subject, email=payload.get("email"), name=name)


def generate_id() -> str:
    return str(uuid4())
