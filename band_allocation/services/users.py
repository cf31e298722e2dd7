# services/users.py
"""User account lifecycle.

Entries reference their owner by username, so renaming or deleting a user
carries over to that user's entries in the same transaction.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..auth import hash_password, verify_password
from ..errors import AuthenticationError, ConflictError, ForbiddenError, NotFoundError, ValidationError
from ..schemas import user as schemas

logger = logging.getLogger(__name__)

# Reserved account: never deleted, and no rename may move onto or off it
ADMIN_USERNAME = "admin"


def _get_by_username(db: Session, username: str):
    return db.query(models.User).filter(models.User.username == username).first()


def list_users(db: Session) -> List[models.User]:
    return db.query(models.User).order_by(models.User.id).all()


def create_user(db: Session, data: schemas.UserCreate) -> models.User:
    if _get_by_username(db, data.username):
        raise ConflictError("User already exists")

    user = models.User(
        username=data.username,
        password=hash_password(data.password),
        role=data.role or models.DEFAULT_ROLE,
        user_zone=data.user_zone,
        is_admin=data.username == ADMIN_USERNAME,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")

    db.refresh(user)
    return user


def update_user(db: Session, changes: schemas.UserUpdate) -> models.User:
    fields = changes.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    if not fields:
        raise ValidationError("No fields to update")

    user = db.query(models.User).filter(models.User.id == changes.id).first()
    if not user:
        raise NotFoundError("User not found")

    new_username = fields.get("username")
    if new_username and new_username != user.username:
        if ADMIN_USERNAME in (user.username, new_username):
            raise ForbiddenError("Cannot rename to or from admin user")
        if _get_by_username(db, new_username):
            raise ConflictError("User already exists")

        moved = db.query(models.Entry).filter(
            models.Entry.user_id == user.username
        ).update({models.Entry.user_id: new_username}, synchronize_session=False)
        logger.info(f"Renaming user {user.username} to {new_username}, {moved} entries moved")

    if "password" in fields:
        fields["password"] = hash_password(fields["password"])

    for key, value in fields.items():
        setattr(user, key, value)
    user.updated_at = models.utc_now()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")

    db.refresh(user)
    return user


def delete_user(db: Session, username: str) -> int:
    """Delete a user and every entry they own. Returns the entry count removed."""
    if username == ADMIN_USERNAME:
        raise ForbiddenError("Cannot delete admin user")

    user = _get_by_username(db, username)
    if not user:
        raise NotFoundError("User not found")

    db.delete(user)
    deleted_entries = db.query(models.Entry).filter(
        models.Entry.user_id == username
    ).delete(synchronize_session=False)
    db.commit()
    return deleted_entries


def authenticate(db: Session, username: str, password: str) -> models.User:
    user = _get_by_username(db, username)
    if not user:
        raise AuthenticationError("Invalid username or password")

    valid, new_hash = verify_password(password, user.password)
    if not valid:
        raise AuthenticationError("Invalid username or password")

    if new_hash:
        # Legacy plain-text password, store it hashed from now on
        user.password = new_hash
        db.commit()
        db.refresh(user)
    return user
