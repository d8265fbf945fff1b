# In: backend/crud.py
from datetime import datetime, timezone

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import auth
import models
import schemas

log = structlog.get_logger(__name__)

# Every stored profile attribute apart from the key
PROFILE_COLUMNS = [column.name for column in models.Profile.__table__.columns if column.name != "owner_id"]


class ProfileStoreError(Exception):
    """The profile store could not be read from or written to."""

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation


def get_user_by_email(db: Session, email: str):
    """
    Queries the database to find a user by their email address.
    """
    return db.query(models.User).filter(models.User.email == email).first()

def create_user(db: Session, user: schemas.UserCreate):
    """
    Creates a new user in the database with a hashed password.
    """
    db_user = models.User(email=user.email, hashed_password=auth.hash_password(user.password))
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def revoke_token(db: Session, jti: str):
    if not is_token_revoked(db, jti):
        db.add(models.RevokedToken(jti=jti, revoked_at=datetime.now(timezone.utc)))
        db.commit()

def is_token_revoked(db: Session, jti: str) -> bool:
    return db.get(models.RevokedToken, jti) is not None

def get_profile(db: Session, user_id: int):
    """
    Retrieves the profile keyed by the owner's user ID, or None if there is none yet.
    """
    try:
        return db.get(models.Profile, user_id)
    except SQLAlchemyError as e:
        log.error("profile_store_error", operation="get", user_id=user_id, error=str(e))
        raise ProfileStoreError("Could not load profile", operation="get") from e

def put_profile(db: Session, user_id: int, record: dict):
    """
    Writes ``record`` as the whole profile document of ``user_id``.

    This is a full replacement: any attribute missing from ``record`` is cleared.
    """
    try:
        db_profile = db.get(models.Profile, user_id)
        if db_profile is None:
            db_profile = models.Profile(owner_id=user_id)
            db.add(db_profile)
        for column in PROFILE_COLUMNS:
            setattr(db_profile, column, record.get(column))
        db.commit()
        db.refresh(db_profile)
        return db_profile
    except SQLAlchemyError as e:
        db.rollback()
        log.error("profile_store_error", operation="put", user_id=user_id, error=str(e))
        raise ProfileStoreError("Could not save profile", operation="put") from e

def list_profiles(db: Session, exclude_user_id: int):
    """
    Returns every profile except the one owned by ``exclude_user_id``.
    """
    try:
        return (
            db.query(models.Profile)
            .filter(models.Profile.owner_id != exclude_user_id)
            .order_by(models.Profile.updated_at.desc())
            .all()
        )
    except SQLAlchemyError as e:
        log.error("profile_store_error", operation="list", exclude_user_id=exclude_user_id, error=str(e))
        raise ProfileStoreError("Could not load profiles", operation="list") from e
