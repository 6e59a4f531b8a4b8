"""Auth request/response schemas."""

from typing import Optional

from assetto.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    username: str
    email: Optional[str] = None
    password: str


class LoginRequest(CamelModel):
    username: str
    password: str


class UserProjection(CamelModel):
    id: str
    username: str
    email: Optional[str]
    role: str


class RegisterResponse(CamelModel):
    message: str
    user: UserProjection


class LoginResponse(CamelModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserProjection
