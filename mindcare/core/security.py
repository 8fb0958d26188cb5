import secrets
from datetime import datetime, timedelta, timezone
from jose import jwt
from .config import settings

ALGORITHM = "HS256"
TOKEN_TYPE_ACCESS = "access"

def _now() -> datetime:
    return datetime.now(timezone.utc)

def create_access_token(user_id: str, ttl_seconds: int | None = None) -> tuple[str, int]:
    """Issue a bearer token whose subject is the user id the assessment is stored under."""
    ttl = int(ttl_seconds if ttl_seconds is not None else settings.JWT_ACCESS_TTL_SECONDS)
    issued = _now()
    payload = {
        "sub": user_id,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(seconds=ttl)).timestamp()),
        "typ": TOKEN_TYPE_ACCESS,
        "jti": secrets.token_urlsafe(16),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM), ttl

def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )

def subject_of(payload: dict) -> str | None:
    if payload.get("typ") != TOKEN_TYPE_ACCESS:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None
