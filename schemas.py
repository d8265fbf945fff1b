# In: backend/schemas.py

import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

# --- User schemas ---
class UserCreate(BaseModel):
    email: str
    password: str

class User(BaseModel):
    id: int
    email: str
    class Config:
        from_attributes = True

class Token(BaseModel):
    access_token: str
    token_type: str


# --- Choices offered by the profile form ---
class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"

class MaritalStatus(str, Enum):
    NEVER_MARRIED = "never-married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    SEPARATED = "separated"

class MotherTongue(str, Enum):
    HINDI = "hindi"
    ENGLISH = "english"
    TAMIL = "tamil"
    TELUGU = "telugu"
    MARATHI = "marathi"
    GUJARATI = "gujarati"
    BENGALI = "bengali"
    KANNADA = "kannada"
    MALAYALAM = "malayalam"
    PUNJABI = "punjabi"

class Education(str, Enum):
    HIGH_SCHOOL = "high-school"
    DIPLOMA = "diploma"
    BACHELORS = "bachelors"
    MASTERS = "masters"
    PHD = "phd"
    PROFESSIONAL = "professional"

class Income(str, Enum):
    """Annual income band, in lakhs."""
    UP_TO_3 = "0-3"
    FROM_3_TO_5 = "3-5"
    FROM_5_TO_7 = "5-7"
    FROM_7_TO_10 = "7-10"
    FROM_10_TO_15 = "10-15"
    FROM_15_TO_20 = "15-20"
    FROM_20_TO_25 = "20-25"
    ABOVE_25 = "25+"

class Religion(str, Enum):
    HINDU = "hindu"
    MUSLIM = "muslim"
    CHRISTIAN = "christian"
    SIKH = "sikh"
    BUDDHIST = "buddhist"
    JAIN = "jain"
    OTHER = "other"

class FamilyType(str, Enum):
    NUCLEAR = "nuclear"
    JOINT = "joint"

class FamilyStatus(str, Enum):
    MIDDLE_CLASS = "middle-class"
    UPPER_MIDDLE = "upper-middle"
    RICH = "rich"
    AFFLUENT = "affluent"

class Diet(str, Enum):
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non-vegetarian"
    VEGAN = "vegan"
    JAIN_VEGETARIAN = "jain-vegetarian"

class Habit(str, Enum):
    NO = "no"
    OCCASIONALLY = "occasionally"
    YES = "yes"


def _blank_to_none(value):
    # Unselected form controls arrive as empty strings
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- Profile schemas ---
class ProfileBase(BaseModel):
    height: Optional[str] = Field(default=None, pattern=r"^\d+ft\d{1,2}in$")
    marital_status: Optional[MaritalStatus] = None
    mother_tongue: Optional[MotherTongue] = None

    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None

    education: Optional[Education] = None
    occupation: Optional[str] = None
    income: Optional[Income] = None

    religion: Optional[Religion] = None
    caste: Optional[str] = None
    family_type: Optional[FamilyType] = None
    family_status: Optional[FamilyStatus] = None

    diet: Optional[Diet] = None
    smoking: Optional[Habit] = None
    drinking: Optional[Habit] = None
    horoscope_match: Optional[bool] = None

    about: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value):
        return _blank_to_none(value)


REQUIRED_FIELD_LABELS = {
    "full_name": "Full name",
    "date_of_birth": "Date of birth",
    "gender": "Gender",
}

class ProfileSubmission(ProfileBase):
    """What the profile form submits. Name, birth date and gender are mandatory."""
    full_name: str = Field(default=None, validate_default=True)
    date_of_birth: datetime.date = Field(default=None, validate_default=True)
    gender: Gender = Field(default=None, validate_default=True)

    @field_validator("full_name", "date_of_birth", "gender", mode="before")
    @classmethod
    def required(cls, value, info):
        value = _blank_to_none(value)
        if value is None:
            raise ValueError(f"{REQUIRED_FIELD_LABELS[info.field_name]} is required")
        return value

    @field_validator("full_name")
    @classmethod
    def strip_name(cls, value):
        return value.strip()

class Profile(ProfileBase):
    full_name: str
    date_of_birth: datetime.date
    gender: Gender
    owner_id: int
    email: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime
    # Derived from date_of_birth on every read, never stored
    age: Optional[int] = None
    class Config:
        from_attributes = True


# --- Viewer schemas ---
class ProfileRow(BaseModel):
    label: str
    value: str

class ProfileSection(BaseModel):
    key: str
    title: str
    rows: List[ProfileRow]

class ProfileHeader(BaseModel):
    full_name: str
    age: Optional[int] = None
    height: Optional[str] = None
    location: Optional[str] = None

class ProfileView(BaseModel):
    exists: bool
    actions: List[str]
    header: Optional[ProfileHeader] = None
    sections: List[ProfileSection] = []


# --- Browse schemas ---
class BrowseFilters(BaseModel):
    """Typed browse criteria. Every unset criterion matches everything."""
    age_min: Optional[int] = Field(default=None, ge=0)
    age_max: Optional[int] = Field(default=None, ge=0)
    religion: Optional[Religion] = None
    education: Optional[Education] = None
    city: Optional[str] = None
    marital_status: Optional[MaritalStatus] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_unset(cls, value):
        return _blank_to_none(value)

class ProfileCard(BaseModel):
    owner_id: int
    full_name: str
    age: Optional[int] = None
    height: Optional[str] = None
    location: Optional[str] = None
    education: Optional[str] = None
    occupation: Optional[str] = None
    religion: Optional[str] = None
    marital_status: Optional[str] = None
    horoscope_match: bool = False
    about: Optional[str] = None

class BrowseResult(BaseModel):
    state: str
    count: int
    profiles: List[ProfileCard]
    message: Optional[str] = None
