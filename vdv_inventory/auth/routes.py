import logging

from fastapi import APIRouter, Depends, Response

from vdv_inventory.auth.dependencies import optional_auth
from vdv_inventory.auth.tokens import issue_token, verify_password
from vdv_inventory.core.config import settings
from vdv_inventory.core.errors import Unauthorized, ValidationError
from vdv_inventory.schemas.auth import AuthStatus, LoginRequest, LoginResponse
from vdv_inventory.schemas.common import SuccessResponse

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, response: Response):
    if not payload.password:
        raise ValidationError("Password required")

    if not verify_password(payload.password):
        log.warning("rejected admin login attempt")
        raise Unauthorized("Invalid password")

    token = issue_token()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="lax",
        max_age=settings.jwt_lifetime_seconds,
    )
    return LoginResponse(token=token)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response):
    # Tokens are not revoked server side; this only drops the cookie
    response.delete_cookie(settings.auth_cookie_name, samesite="lax")
    return SuccessResponse()


@router.get("/check", response_model=AuthStatus)
async def check(authenticated: bool = Depends(optional_auth)):
    return AuthStatus(authenticated=authenticated)
