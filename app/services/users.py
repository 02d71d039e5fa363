import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH
from app.core.errors import (
    DuplicateUserError,
    InvalidCredentialError,
    UnknownUserError,
    ValidationError,
)
from app.core.security import hash_password, verify_password
from app.database.db import transaction
from app.models.users import User, UserRole
from app.schemas.users import UserOut

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username))


def authenticate(db: Session, username: str | None, password: str | None) -> UserOut:
    """
    Verify a username/password pair.
    The returned record never carries the credential hash.
    """
    user = get_user_by_username(db, username) if username else None
    if user is None:
        raise UnknownUserError()
    if not verify_password(password or "", user.password_hash):
        logger.info("Rejected login for user %s", user.id)
        raise InvalidCredentialError()
    return UserOut.model_validate(user)


def register_user(
    db: Session,
    *,
    username: str | None,
    password: str | None,
    name: str | None,
) -> UserOut:
    if not username or not password or not name:
        raise ValidationError("All fields are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", field="password"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
        )
    if get_user_by_username(db, username) is not None:
        raise DuplicateUserError()

    user = User(
        username=username,
        password_hash=hash_password(password),
        name=name,
        role=UserRole.USER.value,
    )
    with transaction(db):
        db.add(user)
        try:
            db.flush()
        except IntegrityError as e:
            # lost a race with a concurrent registration of the same name
            raise DuplicateUserError() from e
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return UserOut.model_validate(user)
