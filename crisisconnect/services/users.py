"""Account mutations that carry invariants: profile changes and admin-initiated deletion."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from crisisconnect.core.security import ROLE_ADMIN
from crisisconnect.models import Report, User

logger = logging.getLogger(__name__)


class UserServiceError(Exception):
    """Base error for user operations; message is safe to show to the caller."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UserNotFoundError(UserServiceError):
    pass


class AdminDeletionError(UserServiceError):
    """Admin accounts can never be deleted."""


class EmailInUseError(UserServiceError):
    pass


def get_user_or_raise(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(f"User {user_id} not found.")
    return user


def email_taken(db: Session, email: str, exclude_user_id: int | None = None) -> bool:
    """True if another account already uses email (already normalized)."""
    query = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def update_profile(
    db: Session,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Change name and/or email of an account; None leaves a field unchanged."""
    user = get_user_or_raise(db, user_id)
    if email is not None and email != user.email:
        if email_taken(db, email, exclude_user_id=user.id):
            raise EmailInUseError("Email is already registered to another account.")
        user.email = email
    if name is not None:
        user.name = name
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailInUseError("Email is already registered to another account.") from e
    db.refresh(user)
    return user


def set_avatar(db: Session, user_id: int, avatar_url: str) -> User:
    user = get_user_or_raise(db, user_id)
    user.avatar = avatar_url
    db.commit()
    db.refresh(user)
    return user


def delete_user_cascade(db: Session, user_id: int) -> int:
    """
    Delete a non-admin user together with their reports.

    Reports go first so no report ever points at a missing owner; both deletes
    share one transaction. Returns the number of reports removed.
    """
    user = get_user_or_raise(db, user_id)
    if user.role == ROLE_ADMIN:
        raise AdminDeletionError("Admin accounts cannot be deleted.")
    try:
        reports_deleted = (
            db.query(Report)
            .filter(Report.user_id == user.id)
            .delete(synchronize_session=False)
        )
        db.delete(user)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(
        "User deleted",
        extra={"user_id": user_id, "reports_deleted": reports_deleted},
    )
    return reports_deleted
