"""
Auth module: credential hashing, JWT creation/validation and the
get_current_principal FastAPI dependency.

Passwords and recovery answers are stored as salted pbkdf2 hashes. Recovery
answers are hashed from their lower-cased form so the comparison stays
case-insensitive.

Identity: a request with a valid bearer token resolves to that user. A request
with no Authorization header resolves to None, which the profile endpoints
treat as the legacy single-account deployment (first row of the user table).
A present but invalid or expired token is rejected with 401.
"""

import time
from dataclasses import dataclass
from typing import Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi import Request
from eclinic.config import get_settings
from eclinic.exceptions import InvalidCredentials

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass
class UserPrincipal:
    """Resolved identity attached to an authenticated request."""
    user_id: int
    username: str
    name: str
    role: str


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: Optional[str], hashed_password: Optional[str]) -> bool:
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def hash_recovery_answer(answer: str) -> str:
    return pwd_context.hash(answer.lower())


def verify_recovery_answer(answer: Optional[str], hashed_answer: Optional[str]) -> bool:
    """Case-insensitive check. A missing answer on either side never matches."""
    if answer is None or hashed_answer is None:
        return False
    return pwd_context.verify(answer.lower(), hashed_answer)


def create_token(user) -> str:
    """Create a signed JWT for the given User model instance."""
    settings = get_settings()
    payload = {
        "sub": str(user.id),
        "username": user.username,
        "name": user.name,
        "role": user.role,
        "exp": int(time.time()) + settings.token_expire_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[UserPrincipal]:
    """Decode and validate a JWT. Returns None if invalid/expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[ALGORITHM])
        return UserPrincipal(
            user_id=int(payload["sub"]),
            username=payload.get("username", ""),
            name=payload.get("name", ""),
            role=payload.get("role", ""),
        )
    except (JWTError, KeyError, ValueError):
        return None


async def get_current_principal(request: Request) -> Optional[UserPrincipal]:
    """
    FastAPI dependency. Extracts the JWT from the Authorization header.
    Returns None when no bearer token is sent.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    principal = decode_token(auth_header[7:])
    if principal is None:
        raise InvalidCredentials("Could not validate credentials")
    return principal
