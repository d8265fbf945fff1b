from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

import crud
import editor
import models
import schemas

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def owner(db_session):
    user = models.User(email="aditi@example.com", hashed_password="x")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def test_submission_requires_name_birth_date_and_gender():
    with pytest.raises(ValidationError) as exc_info:
        schemas.ProfileSubmission(full_name="", city="Pune")
    errors = {error["loc"][0]: error["msg"] for error in exc_info.value.errors()}
    assert set(errors) == {"full_name", "date_of_birth", "gender"}
    assert "Full name is required" in errors["full_name"]
    assert "Date of birth is required" in errors["date_of_birth"]
    assert "Gender is required" in errors["gender"]


def test_blank_optional_fields_are_absent():
    submission = schemas.ProfileSubmission(
        full_name="Aditi", date_of_birth="1995-01-01", gender="female", city="", religion="", horoscope_match="",
    )
    assert submission.city is None
    assert submission.religion is None
    assert submission.horoscope_match is None


def test_unknown_choice_is_rejected():
    with pytest.raises(ValidationError):
        schemas.ProfileSubmission(full_name="Aditi", date_of_birth="1995-01-01", gender="female", diet="paleo")


def test_compose_record_adds_owner_and_timestamps(owner):
    submission = schemas.ProfileSubmission(
        full_name="Aditi", date_of_birth="1995-01-01", gender="female", religion="hindu",
    )
    record = editor.compose_record(submission, owner, now=NOW)
    assert record == {
        "full_name": "Aditi",
        "date_of_birth": date(1995, 1, 1),
        "gender": "female",
        "religion": "hindu",
        "owner_id": owner.id,
        "email": "aditi@example.com",
        "created_at": NOW,
        "updated_at": NOW,
    }


def test_save_then_load_round_trip(db_session, owner):
    submission = schemas.ProfileSubmission(
        full_name="Aditi", date_of_birth="1995-01-01", gender="female", city="Pune", income="10-15",
    )
    editor.save_profile(db_session, submission, owner, now=NOW)

    loaded = editor.load_for_edit(db_session, owner, today=date(2024, 6, 1))
    assert loaded.owner_id == owner.id
    assert loaded.email == owner.email
    assert loaded.age == 29
    dumped = loaded.model_dump(mode="json")
    for field, value in submission.model_dump(mode="json", exclude_none=True).items():
        assert dumped[field] == value


def test_save_replaces_whole_document(db_session, owner):
    first = schemas.ProfileSubmission(
        full_name="Aditi", date_of_birth="1995-01-01", gender="female", city="Pune", caste="Iyer",
    )
    editor.save_profile(db_session, first, owner, now=NOW)

    second = schemas.ProfileSubmission(full_name="Aditi R", date_of_birth="1995-01-01", gender="female")
    later = datetime(2024, 5, 2, tzinfo=timezone.utc)
    saved = editor.save_profile(db_session, second, owner, now=later)

    assert saved.full_name == "Aditi R"
    assert saved.city is None
    assert saved.caste is None
    assert saved.updated_at == later
    assert saved.created_at.tzinfo is timezone.utc
    assert db_session.query(models.Profile).count() == 1


def test_missing_profile_loads_as_none(db_session, owner):
    assert editor.load_for_edit(db_session, owner) is None


def test_store_failure_is_raised(db_session, owner, monkeypatch):
    def broken_put(db, user_id, record):
        raise crud.ProfileStoreError("Could not save profile", operation="put")

    monkeypatch.setattr(crud, "put_profile", broken_put)
    submission = schemas.ProfileSubmission(full_name="Aditi", date_of_birth="1995-01-01", gender="female")
    with pytest.raises(crud.ProfileStoreError):
        editor.save_profile(db_session, submission, owner)
