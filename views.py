# In: backend/views.py

from enum import Enum
from typing import List, Optional

import schemas

# (section key, title, [(field, label), ...]) in display order
SECTIONS = [
    ("personal", "Personal Details", [
        ("date_of_birth", "Date of Birth"),
        ("gender", "Gender"),
        ("marital_status", "Marital Status"),
        ("mother_tongue", "Mother Tongue"),
    ]),
    ("location", "Location", [
        ("country", "Country"),
        ("state", "State"),
        ("city", "City"),
    ]),
    ("education_career", "Education & Career", [
        ("education", "Education"),
        ("occupation", "Occupation"),
        ("income", "Annual Income"),
    ]),
    ("family_religion", "Family & Religion", [
        ("religion", "Religion"),
        ("caste", "Caste"),
        ("family_type", "Family Type"),
        ("family_status", "Family Status"),
    ]),
    ("lifestyle", "Lifestyle", [
        ("diet", "Diet"),
        ("smoking", "Smoking"),
        ("drinking", "Drinking"),
        ("horoscope_match", "Horoscope Match"),
    ]),
    ("about", "About Me", [
        ("about", "About"),
    ]),
]


def humanize(value: str) -> str:
    """'never-married' -> 'Never Married'."""
    return value.replace("-", " ").title()


def display_value(field: str, value) -> str:
    if field == "date_of_birth":
        return value.isoformat()
    if field == "income":
        return f"{value.value} Lakhs"
    if field == "horoscope_match":
        return "Required" if value else "Not Required"
    if isinstance(value, Enum):
        return humanize(value.value)
    return str(value)


def location_of(profile: schemas.Profile) -> Optional[str]:
    if profile.city and profile.state:
        return f"{profile.city}, {profile.state}"
    return None


def build_sections(profile: schemas.Profile) -> List[schemas.ProfileSection]:
    """Groups the present fields by category; absent fields and empty sections are left out."""
    sections = []
    for key, title, fields in SECTIONS:
        rows = [
            schemas.ProfileRow(label=label, value=display_value(field, getattr(profile, field)))
            for field, label in fields
            if getattr(profile, field) is not None
        ]
        if rows:
            sections.append(schemas.ProfileSection(key=key, title=title, rows=rows))
    return sections


def build_profile_view(profile: Optional[schemas.Profile]) -> schemas.ProfileView:
    if profile is None:
        return schemas.ProfileView(exists=False, actions=["create"])
    header = schemas.ProfileHeader(
        full_name=profile.full_name,
        age=profile.age,
        height=profile.height,
        location=location_of(profile),
    )
    return schemas.ProfileView(exists=True, actions=["edit"], header=header, sections=build_sections(profile))


def build_card(profile: schemas.Profile) -> schemas.ProfileCard:
    return schemas.ProfileCard(
        owner_id=profile.owner_id,
        full_name=profile.full_name,
        age=profile.age,
        height=profile.height,
        location=location_of(profile),
        education=humanize(profile.education.value) if profile.education else None,
        occupation=profile.occupation,
        religion=humanize(profile.religion.value) if profile.religion else None,
        marital_status=humanize(profile.marital_status.value) if profile.marital_status else None,
        horoscope_match=bool(profile.horoscope_match),
        about=profile.about,
    )
