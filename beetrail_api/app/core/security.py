"""
Security helpers for password hashing and JWT authentication.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random 16-byte salt
per password; the stored string is ``<salt hex>$<hash hex>``.

Access tokens are HS256 JSON Web Tokens signed with the secret from the
application settings (PyJWT).  They embed the user's id, username, role
and the ``issuedSyncToken`` handed out at login, and expire after
``settings.access_token_expire_minutes``.  Clients send them as
``Authorization: Bearer <token>``.
"""

import hashlib
import hmac
import logging
import os
import time
from typing import Any, Callable, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings
from .context import AppContext, get_context
from .errors import AuthError, ForbiddenError


logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000

ROLE_BEEKEEPER = "beekeeper"
ROLE_ADMIN = "admin"
ROLES = (ROLE_BEEKEEPER, ROLE_ADMIN)


def now_ms() -> int:
    """Current server time in epoch milliseconds; used as the sync token."""
    return int(time.time() * 1000)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256 and a fresh salt."""
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plain password against a stored ``salt$hash`` string in constant time."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)


def create_access_token(claims: Dict[str, Any], settings: Settings, expires_in: Optional[int] = None) -> str:
    """Sign ``claims`` into a JWT.

    ``iat`` and ``exp`` are added here; ``expires_in`` is the lifetime
    in seconds and defaults to ``settings.access_token_expire_minutes``.
    """
    issued_at = int(time.time())
    lifetime = expires_in if expires_in is not None else settings.access_token_expire_minutes * 60
    payload = dict(claims)
    payload["iat"] = issued_at
    payload["exp"] = issued_at + lifetime
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Verify a JWT and return its claims.

    Raises ``AuthError`` when the token is malformed, expired or signed
    with another key.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthError("Invalid token")


bearer = HTTPBearer(scheme_name="bearerAuth", bearerFormat="JWT", auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    ctx: AppContext = Depends(get_context),
) -> Dict[str, Any]:
    """Dependency returning the claims of the bearer token on the request."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Access token required")
    claims = decode_access_token(credentials.credentials.strip(), ctx.settings)
    if claims.get("role") not in ROLES or not claims.get("username"):
        raise AuthError("Invalid token")
    return claims


def require_role(role: str) -> Callable[..., Dict[str, Any]]:
    """Dependency factory allowing only users whose token carries ``role``.

    Use as ``Depends(require_role(ROLE_ADMIN))``.
    """

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role") != role:
            logger.warning("User %s denied: %s role required", current_user.get("username"), role)
            raise ForbiddenError(f"{role.capitalize()} access required")
        return current_user

    return _role_dependency
