# services/entries.py
"""Entry allocation, listing, update and deletion.

Band numbers are unique across the whole entries table. The unique index
on ``band_no`` is what enforces it; the duplicate queries below only serve
to report which user already holds a colliding number.
"""

import logging
import uuid
from collections import Counter
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..errors import ConflictError, NotFoundError, ValidationError
from ..schemas import entry as schemas

logger = logging.getLogger(__name__)

# userId value addressing every entry regardless of owner
ALL_USERS = "all"

SORT_BAND_NO = "bandNo"
SORT_RECENT = "recent"


def find_duplicates(
    db: Session, band_numbers: Iterable[int], exclude_id: Optional[int] = None
) -> List[Dict]:
    """Return ``{bandNo, user}`` for every stored entry holding one of ``band_numbers``."""
    query = db.query(models.Entry).filter(models.Entry.band_no.in_(list(band_numbers)))
    if exclude_id is not None:
        query = query.filter(models.Entry.id != exclude_id)

    return [
        {"bandNo": entry.band_no, "user": entry.user_id}
        for entry in query.order_by(models.Entry.band_no).all()
    ]


def _duplicate_bands_error(duplicates: List[Dict]) -> ConflictError:
    return ConflictError("Duplicate band numbers found", duplicateBands=duplicates)


def create_entries(db: Session, submission: schemas.EntryCreate) -> Tuple[List[int], str]:
    """Insert one entry per submitted band number, all or nothing.

    When ``entry_id`` names an earlier submission of the same user, its rows
    are replaced within the same transaction. Returns the new row ids and
    the group id shared by all of them.
    """
    bands = submission.bands
    repeated = sorted(band for band, seen in Counter(bands).items() if seen > 1)
    if repeated:
        raise ValidationError(f"Band numbers repeated in submission: {repeated}")

    group_id = submission.entry_id or uuid.uuid4().hex
    amount = submission.amount_per_band if submission.amount_per_band is not None else models.DEFAULT_AMOUNT

    try:
        replaced = 0
        if submission.entry_id:
            replaced = db.query(models.Entry).filter(
                models.Entry.user_id == submission.user_id,
                models.Entry.entry_group_id == group_id,
            ).delete(synchronize_session=False)

        # Rows of the replaced group are already gone, so an edit may reuse its own numbers
        duplicates = find_duplicates(db, bands)
        if duplicates:
            db.rollback()
            raise _duplicate_bands_error(duplicates)

        now = models.utc_now()
        rows = [
            models.Entry(
                band_no=band_no,
                name=submission.name,
                zone=submission.zone,
                community=submission.community,
                amount=amount,
                user_id=submission.user_id,
                entry_group_id=group_id,
                edited=replaced > 0,
                created_at=now,
                updated_at=now,
            )
            for band_no in bands
        ]
        db.add_all(rows)
        db.flush()
        ids = [row.id for row in rows]
        db.commit()
    except IntegrityError:
        # Another writer claimed one of the numbers after the duplicate check
        db.rollback()
        raise _duplicate_bands_error(find_duplicates(db, bands))

    if replaced:
        logger.info(f"Replaced {replaced} entries of group {group_id} for {submission.user_id}")
    return ids, group_id


def list_entries(db: Session, user_id: str, sort: str = SORT_BAND_NO) -> List[models.Entry]:
    query = db.query(models.Entry)
    if user_id != ALL_USERS:
        query = query.filter(models.Entry.user_id == user_id)

    if sort == SORT_RECENT:
        query = query.order_by(models.Entry.created_at.desc(), models.Entry.band_no)
    else:
        query = query.order_by(models.Entry.band_no)
    return query.all()


def update_entry(db: Session, changes: schemas.EntryUpdate) -> int:
    """Apply a partial update to one entry. Returns the modified row count."""
    fields = changes.model_dump(exclude_unset=True, exclude_none=True, exclude={"id"})
    if not fields:
        raise ValidationError("No fields to update")

    entry = db.query(models.Entry).filter(models.Entry.id == changes.id).first()
    if not entry:
        raise NotFoundError("Entry not found")

    new_band_no = fields.pop("new_band_no", None)
    if new_band_no is not None and new_band_no != entry.band_no:
        duplicates = find_duplicates(db, [new_band_no], exclude_id=entry.id)
        if duplicates:
            raise ConflictError("Band number already exists", duplicateBands=duplicates)
        entry.band_no = new_band_no

    for key, value in fields.items():
        setattr(entry, key, value)
    entry.updated_at = models.utc_now()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(
            "Band number already exists",
            duplicateBands=find_duplicates(db, [new_band_no], exclude_id=changes.id),
        )
    return 1


def delete_entries(
    db: Session,
    entry_id: Optional[int] = None,
    band_no: Optional[int] = None,
    user_id: Optional[str] = None,
) -> int:
    """Delete by row id, by band number (optionally for one owner) or everything.

    The first identifying argument present selects the mode. Returns the
    number of rows removed.
    """
    query = db.query(models.Entry)

    if entry_id is not None:
        deleted = query.filter(models.Entry.id == entry_id).delete(synchronize_session=False)
        if not deleted:
            raise NotFoundError("Entry not found")
    elif band_no is not None:
        query = query.filter(models.Entry.band_no == band_no)
        if user_id and user_id != ALL_USERS:
            query = query.filter(models.Entry.user_id == user_id)
        deleted = query.delete(synchronize_session=False)
    elif user_id == ALL_USERS:
        deleted = query.delete(synchronize_session=False)
    else:
        raise ValidationError("Missing id, bandNo or userId=all")

    db.commit()
    return deleted
