from typing import Optional

from vdv_inventory.schemas.common import CamelModel


class LoginRequest(CamelModel):
    password: Optional[str] = None


class LoginResponse(CamelModel):
    success: bool = True
    token: str


class AuthStatus(CamelModel):
    authenticated: bool
