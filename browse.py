# In: backend/browse.py

from datetime import date, timezone
from enum import Enum
from typing import Callable, List, Optional

import structlog
from pydantic import ValidationError
from sqlalchemy.orm import Session

import crud
import models
import schemas

log = structlog.get_logger(__name__)


def derive_age(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    """Age as the difference of calendar years.

    Month and day are ignored, so someone born on 2000-12-31 is 24 on 2024-01-01.
    """
    if date_of_birth is None:
        return None
    today = today or date.today()
    return today.year - date_of_birth.year


def to_profile(db_profile: models.Profile, today: Optional[date] = None) -> schemas.Profile:
    """Converts a stored profile to its API form, adding the derived age.

    Timestamps come back as UTC even where the database drops the offset.
    A row that does not validate is reported as a store failure.
    """
    try:
        profile = schemas.Profile.model_validate(db_profile)
    except ValidationError as e:
        log.error("profile_store_error", operation="get", user_id=db_profile.owner_id, error=str(e))
        raise crud.ProfileStoreError("Malformed profile document", operation="get") from e
    for field in ("created_at", "updated_at"):
        value = getattr(profile, field)
        if value.tzinfo is None:
            setattr(profile, field, value.replace(tzinfo=timezone.utc))
    profile.age = derive_age(profile.date_of_birth, today)
    return profile


def _criteria(filters: schemas.BrowseFilters) -> List[Callable[[schemas.Profile], bool]]:
    predicates = []
    if filters.age_min is not None:
        predicates.append(lambda p: p.age is not None and p.age >= filters.age_min)
    if filters.age_max is not None:
        predicates.append(lambda p: p.age is not None and p.age <= filters.age_max)
    if filters.religion is not None:
        predicates.append(lambda p: p.religion == filters.religion)
    if filters.education is not None:
        predicates.append(lambda p: p.education == filters.education)
    if filters.city is not None:
        needle = filters.city.lower()
        predicates.append(lambda p: p.city is not None and needle in p.city.lower())
    if filters.marital_status is not None:
        predicates.append(lambda p: p.marital_status == filters.marital_status)
    return predicates


def apply_filters(profiles: List[schemas.Profile], filters: schemas.BrowseFilters) -> List[schemas.Profile]:
    """Returns the profiles satisfying every set criterion, preserving order."""
    predicates = _criteria(filters)
    return [p for p in profiles if all(predicate(p) for predicate in predicates)]


class BrowseState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    LOAD_FAILED = "load_failed"


class ProfileBrowser:
    """Loads everyone else's profiles once and filters them in memory.

    Changing the filters re-derives the result from the full loaded set;
    the store is only queried by ``load``.
    """

    def __init__(self, db: Session, current_user: models.User, today: Optional[date] = None):
        self.db = db
        self.current_user = current_user
        self.today = today
        self.state = BrowseState.IDLE
        self.filters = schemas.BrowseFilters()
        self.profiles: List[schemas.Profile] = []
        self.results: List[schemas.Profile] = []

    def load(self) -> List[schemas.Profile]:
        self.state = BrowseState.LOADING
        try:
            rows = crud.list_profiles(self.db, exclude_user_id=self.current_user.id)
        except crud.ProfileStoreError:
            self.state = BrowseState.LOAD_FAILED
            raise
        self.profiles = [to_profile(row, self.today) for row in rows]
        self.state = BrowseState.LOADED
        log.info("profiles_loaded", user_id=self.current_user.id, count=len(self.profiles))
        self.results = apply_filters(self.profiles, self.filters)
        return self.results

    def set_filters(self, filters: schemas.BrowseFilters) -> List[schemas.Profile]:
        self.filters = filters
        if self.state is BrowseState.LOADED:
            self.results = apply_filters(self.profiles, filters)
        return self.results
