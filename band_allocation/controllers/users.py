# controllers/users.py
"""User management endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..schemas import user as schemas
from ..services import users as service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=schemas.UserList, summary="List users")
def list_users(db: Session = Depends(get_db)):
    users = service.list_users(db)
    return {
        "success": True,
        "data": [schemas.User.model_validate(user) for user in users],
        "count": len(users),
    }


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a user")
def create_user(data: schemas.UserCreate, db: Session = Depends(get_db)):
    logger.info(f"Creating user: {data.username}")

    user = service.create_user(db, data)
    return {
        "success": True,
        "id": str(user.id),
        "message": f"User '{user.username}' created with role '{user.role}'",
    }


@router.put("", summary="Update a user")
def update_user(changes: schemas.UserUpdate, db: Session = Depends(get_db)):
    """Update username, password, role or zones of an existing user."""
    logger.info(f"Updating user {changes.id}")

    service.update_user(db, changes)
    return {"success": True, "message": "User updated successfully"}


@router.delete("", summary="Delete a user")
def delete_user(username: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    """Delete a user together with every entry they own. ``admin`` is protected."""
    logger.info(f"Deleting user: {username}")

    deleted_entries = service.delete_user(db, username)
    return {
        "success": True,
        "message": f"User '{username}' and their data deleted",
        "deletedEntries": deleted_entries,
    }


@router.post("/login", summary="Check a username and password")
def login(credentials: schemas.UserLogin, db: Session = Depends(get_db)):
    user = service.authenticate(db, credentials.username, credentials.password)
    return {"success": True, "data": schemas.User.model_validate(user).model_dump(by_alias=True, mode="json")}
