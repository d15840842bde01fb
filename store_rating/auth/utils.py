import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from store_rating.auth.permissions import Role
from store_rating.core.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Verified session subject, recovered from a token."""
    subject_id: str
    email: str
    role: Role


@lru_cache()
def get_pwd_context() -> CryptContext:
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def hash_password(password: str) -> str:
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Fails closed: any unreadable hash counts as a mismatch."""
    if not plain_password or not hashed_password:
        return False
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be verified")
        return False


def issue_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(identity.subject_id),
        "email": identity.email,
        "role": identity.role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[Identity]:
    """Decode and validate a token. Returns None if invalid or expired."""
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_sub": True},
        )
        return Identity(
            subject_id=payload["sub"],
            email=payload["email"],
            role=Role(payload["role"]),
        )
    except (JWTError, KeyError, ValueError, TypeError):
        return None
