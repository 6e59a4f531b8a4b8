"""Auth router — registration and login."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from assetto.config import settings
from assetto.database import get_db
from assetto.middleware.rate_limit import limiter
from assetto.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserProjection,
)
from assetto.services import auth_service

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth/register", response_model=RegisterResponse)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user."""
    user = auth_service.register(db, req.username, req.password, email=req.email)
    return RegisterResponse(
        message="Registration successful!",
        user=UserProjection.model_validate(user),
    )


@router.post("/auth/login", response_model=LoginResponse)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """Check credentials and return a bearer token. Never returns the password hash."""
    user, token = auth_service.login(db, req.username, req.password)
    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserProjection.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse, include_in_schema=False)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login_legacy(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    user, token = auth_service.login(db, req.username, req.password)
    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserProjection.model_validate(user),
    )
