# controllers/entries.py
"""Entry API endpoints: allocate, list, update and delete band numbers."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from .. import models
from ..dependencies import get_db
from ..schemas import entry as schemas
from ..services import entries as service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=schemas.EntryList, summary="List entries")
def list_entries(
    user_id: str = Query(models.DEFAULT_USER_ID, alias="userId"),
    sort: str = Query(service.SORT_BAND_NO, pattern="^(bandNo|recent)$"),
    db: Session = Depends(get_db)
):
    """List one user's entries, or every entry with ``userId=all``."""
    logger.debug(f"Fetching entries (userId={user_id}, sort={sort})")

    entries = service.list_entries(db, user_id, sort)
    return {
        "success": True,
        "data": [schemas.Entry.model_validate(entry) for entry in entries],
        "count": len(entries),
    }


@router.post("", status_code=status.HTTP_201_CREATED, summary="Allocate band numbers")
def create_entries(submission: schemas.EntryCreate, db: Session = Depends(get_db)):
    """Create one entry per band number, or replace the group named by ``entryId``."""
    logger.info(f"Allocating bands {submission.bands} for {submission.user_id}")

    ids, group_id = service.create_entries(db, submission)
    return {
        "success": True,
        "insertedCount": len(ids),
        "ids": [str(entry_id) for entry_id in ids],
        "entryGroupId": group_id,
    }


@router.put("", summary="Update an entry")
def update_entry(changes: schemas.EntryUpdate, db: Session = Depends(get_db)):
    logger.info(f"Updating entry {changes.id}")

    modified = service.update_entry(db, changes)
    return {"success": True, "message": "Entry updated successfully", "modifiedCount": modified}


@router.delete("", summary="Delete entries")
def delete_entries(
    entry_id: Optional[int] = Query(None, alias="id", ge=1, le=schemas.MAX_INT),
    band_no: Optional[int] = Query(None, alias="bandNo", ge=0, le=schemas.MAX_INT),
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """Delete by ``id``, by ``bandNo`` (optionally scoped to ``userId``) or all with ``userId=all``."""
    logger.info(f"Deleting entries (id={entry_id}, bandNo={band_no}, userId={user_id})")

    deleted = service.delete_entries(db, entry_id=entry_id, band_no=band_no, user_id=user_id)
    return {"success": True, "deletedCount": deleted}
