# credentials.py
import logging
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext

import config

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        # unknown or malformed hash
        return False


def issue_token(user_id: int, issued_at: datetime | None = None) -> str:
    """Sign a session token for `user_id` valid for JWT_EXPIRES_DAYS."""
    if not config.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")
    now = issued_at or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=config.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_token(token: str) -> int | None:
    """Return the user id the token was issued for, or None.

    Any decoding problem (bad signature, expiry, garbage input, missing
    subject) yields None rather than an exception.
    """
    if not token or not config.JWT_SECRET:
        return None
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.PyJWTError as e:
        logger.info(f"Rejected session token: {e}")
        return None
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None
