# In: backend/editor.py

from datetime import date, datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.orm import Session

import crud
import models
import schemas
from browse import to_profile

log = structlog.get_logger(__name__)


def load_for_edit(db: Session, current_user: models.User, today: Optional[date] = None) -> Optional[schemas.Profile]:
    """The signed-in user's profile, used to pre-populate the form. None when not created yet."""
    db_profile = crud.get_profile(db, user_id=current_user.id)
    if db_profile is None:
        return None
    return to_profile(db_profile, today)


def compose_record(submission: schemas.ProfileSubmission, current_user: models.User, now: datetime = None) -> dict:
    """Merges the submitted fields with the owner's identity and fresh timestamps."""
    now = now or datetime.now(timezone.utc)
    record = submission.model_dump(mode="json", exclude_none=True)
    # Dates go to the store as date objects, not strings
    record["date_of_birth"] = submission.date_of_birth
    record.update({
        "owner_id": current_user.id,
        "email": current_user.email,
        "created_at": now,
        "updated_at": now,
    })
    return record


def save_profile(db: Session, submission: schemas.ProfileSubmission, current_user: models.User,
                 now: datetime = None, today: Optional[date] = None) -> schemas.Profile:
    record = compose_record(submission, current_user, now)
    db_profile = crud.put_profile(db, user_id=current_user.id, record=record)
    log.info("profile_saved", user_id=current_user.id, fields=sorted(submission.model_fields_set))
    return to_profile(db_profile, today)
