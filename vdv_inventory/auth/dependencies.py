# auth/dependencies.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vdv_inventory.auth.tokens import is_authenticated
from vdv_inventory.core.config import settings
from vdv_inventory.core.errors import Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Bearer header wins; the dashboard's HTTP-only cookie is the fallback."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.auth_cookie_name)


async def require_auth(token: Optional[str] = Depends(get_request_token)) -> bool:
    if not is_authenticated(token):
        raise Unauthorized()
    return True


async def optional_auth(token: Optional[str] = Depends(get_request_token)) -> bool:
    return is_authenticated(token)
