import views
from conftest import make_profile


def test_missing_profile_offers_create():
    view = views.build_profile_view(None)
    assert view.exists is False
    assert view.actions == ["create"]
    assert view.header is None
    assert view.sections == []


def test_minimal_profile_shows_only_present_rows():
    profile = make_profile(1, age=29, full_name="Aditi", gender="female")
    view = views.build_profile_view(profile)

    assert view.exists is True
    assert view.actions == ["edit"]
    assert view.header.full_name == "Aditi"
    assert view.header.age == 29
    assert view.header.location is None

    assert [section.key for section in view.sections] == ["personal"]
    rows = {row.label: row.value for row in view.sections[0].rows}
    assert rows == {"Date of Birth": "1995-03-10", "Gender": "Female"}


def test_sections_follow_category_order():
    profile = make_profile(
        2,
        age=30,
        city="Pune",
        state="Maharashtra",
        occupation="Engineer",
        income="5-7",
        religion="jain",
        family_status="upper-middle",
        diet="jain-vegetarian",
        horoscope_match=False,
        about="Likes trekking.",
    )
    sections = views.build_sections(profile)
    assert [s.key for s in sections] == [
        "personal", "location", "education_career", "family_religion", "lifestyle", "about",
    ]
    values = {row.label: row.value for s in sections for row in s.rows}
    assert values["Annual Income"] == "5-7 Lakhs"
    assert values["Family Status"] == "Upper Middle"
    assert values["Diet"] == "Jain Vegetarian"
    assert values["Horoscope Match"] == "Not Required"
    assert values["About"] == "Likes trekking."
    assert "Country" not in values
    assert "Caste" not in values


def test_location_needs_city_and_state():
    assert views.location_of(make_profile(1, city="Pune")) is None
    assert views.location_of(make_profile(1, city="Pune", state="Maharashtra")) == "Pune, Maharashtra"


def test_card():
    profile = make_profile(
        7,
        age=27,
        full_name="Rahul",
        gender="male",
        education="high-school",
        religion="sikh",
        marital_status="never-married",
        horoscope_match=True,
    )
    card = views.build_card(profile)
    assert card.owner_id == 7
    assert card.full_name == "Rahul"
    assert card.age == 27
    assert card.education == "High School"
    assert card.religion == "Sikh"
    assert card.marital_status == "Never Married"
    assert card.horoscope_match is True
    assert card.location is None
