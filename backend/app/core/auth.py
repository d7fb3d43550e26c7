"""
Password hashing and access tokens for the admin API.

An access token carries the user id (sub), email and role. The role claim must
match the stored user on every request, so changing a user's role revokes the
tokens issued before the change.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta

import bcrypt
from jose import JWTError, jwt

from app.config import settings

BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class AccessClaims:
    user_id: uuid.UUID
    email: str
    role: str


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8")[:BCRYPT_MAX_BYTES], bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES], password_hash.encode("utf-8"))


def _signing_key() -> tuple[str, str]:
    # RS256 when both PEM keys are configured, else the shared secret
    if settings.use_rs256:
        return settings.jwt_private_key.strip(), "RS256"
    return settings.secret_key, settings.jwt_algorithm


def _verification_key() -> tuple[str, str]:
    if settings.use_rs256:
        return settings.jwt_public_key.strip(), "RS256"
    return settings.secret_key, settings.jwt_algorithm


def create_access_token(user_id: uuid.UUID, email: str, role: str) -> str:
    key, algorithm = _signing_key()
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(claims, key, algorithm=algorithm)


def decode_token(token: str) -> AccessClaims:
    """Verify signature and expiry, then parse the claims. Raises JWTError on any problem."""
    key, algorithm = _verification_key()
    payload = jwt.decode(token, key, algorithms=[algorithm])
    role = payload.get("role")
    if not role:
        raise JWTError("Token has no role claim")
    try:
        user_id = uuid.UUID(payload.get("sub") or "")
    except ValueError as e:
        raise JWTError("Token subject is not a user id") from e
    return AccessClaims(user_id=user_id, email=payload.get("email", ""), role=role)
