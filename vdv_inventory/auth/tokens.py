# vdv_inventory/auth/tokens.py
import logging
import secrets
from typing import Optional

import jwt
from fastapi_users.jwt import decode_jwt, generate_jwt

from vdv_inventory.core.config import settings

log = logging.getLogger(__name__)


def verify_password(password: str) -> bool:
    """Compare against the single shared admin password."""
    if not settings.admin_password:
        log.error("ADMIN_PASSWORD is not set; all logins are refused")
        return False
    return secrets.compare_digest(password.encode(), settings.admin_password.encode())


def issue_token() -> str:
    # No subject: the token only says "holder knows the admin password"
    return generate_jwt(
        {"authenticated": True, "aud": settings.jwt_audience},
        settings.jwt_secret,
        lifetime_seconds=settings.jwt_lifetime_seconds,
        algorithm=settings.jwt_algorithm,
    )


def is_authenticated(token: Optional[str]) -> bool:
    """Fails closed: any decode or signature problem means not authenticated."""
    if not token:
        return False
    try:
        payload = decode_jwt(
            token,
            settings.jwt_secret,
            [settings.jwt_audience],
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError:
        return False
    return payload.get("authenticated") is True
