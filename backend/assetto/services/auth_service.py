"""Auth service — registration and username/password login."""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetto.errors import AuthError, ConflictError, ValidationError
from assetto.middleware.auth import create_access_token, hash_password, verify_password
from assetto.models.user import User
from assetto.services import events

logger = logging.getLogger(__name__)


def register(db: Session, username: str, password: str, email: str = None) -> User:
    """Create a user account with a bcrypt-hashed password."""
    if not username or not username.strip():
        raise ValidationError("username is required")
    if not password:
        raise ValidationError("password is required")

    if db.query(User).filter(User.username == username).first():
        raise ConflictError("Username already exists")

    user = User(
        id=str(uuid.uuid4()),
        username=username,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Username already exists") from e
    db.refresh(user)
    logger.info("Registered user %s", user.id)

    events.notify(db, "New Registration", f"{username} registered successfully", "info")
    events.log_activity(db, username, "REGISTER", "User", "New user account created")
    return user


def login(db: Session, username: str, password: str) -> tuple[User, str]:
    """Check credentials and return the user with a fresh access token."""
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise AuthError("User not found")
    if not verify_password(password, user.password_hash):
        raise AuthError("Invalid password")

    token = create_access_token({"sub": user.id, "username": user.username})
    events.log_activity(db, user.username, "LOGIN", "User", "User logged in")
    return user, token
