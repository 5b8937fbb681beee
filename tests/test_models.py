"""Tests for data models and wire-format helpers."""

from datetime import date, datetime, timedelta, timezone

from kyushoku.advisor.models import (
    DocumentSource,
    HomeMenuSuggestion,
    Nutrition,
    SchoolLunchMenu,
    calendar_day,
    format_rfc3339,
    parse_rfc3339,
)


def test_format_rfc3339_utc_uses_z():
    dt = datetime(2025, 1, 13, tzinfo=timezone.utc)
    assert format_rfc3339(dt) == "2025-01-13T00:00:00Z"


def test_format_rfc3339_keeps_offset():
    jst = timezone(timedelta(hours=9))
    dt = datetime(2025, 1, 13, 12, 30, tzinfo=jst)
    assert format_rfc3339(dt) == "2025-01-13T12:30:00+09:00"


def test_format_rfc3339_bare_date_is_utc_midnight():
    assert format_rfc3339(date(2025, 1, 20)) == "2025-01-20T00:00:00Z"


def test_parse_rfc3339_z_suffix():
    dt = parse_rfc3339("2025-01-13T00:00:00Z")
    assert dt == datetime(2025, 1, 13, tzinfo=timezone.utc)


def test_parse_rfc3339_naive_taken_as_utc():
    dt = parse_rfc3339("2025-01-13")
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)


def test_parse_rfc3339_any_fraction_length():
    """One to nine fractional digits parse; extra precision is truncated."""
    assert parse_rfc3339("2025-01-13T08:15:30.5Z").microsecond == 500000
    assert parse_rfc3339("2025-01-13T08:15:30.1234Z").microsecond == 123400
    dt = parse_rfc3339("2025-01-13T08:15:30.987654321+09:00")
    assert dt.microsecond == 987654
    assert dt.utcoffset() == timedelta(hours=9)


def test_calendar_day_truncates_in_own_offset():
    """A JST timestamp keeps its local calendar day."""
    jst = timezone(timedelta(hours=9))
    dt = datetime(2025, 1, 13, 1, 0, tzinfo=jst)
    assert calendar_day(dt) == date(2025, 1, 13)
    assert calendar_day(date(2025, 1, 13)) == date(2025, 1, 13)


def test_school_lunch_menu_to_dict_wire_shape():
    menu = SchoolLunchMenu(
        date=datetime(2025, 1, 13, tzinfo=timezone.utc),
        main_dish="鶏肉の照り焼き",
        side_dishes=["おひたし", "白米"],
        soup="みそ汁",
        nutrition=Nutrition(calories=650, protein_g=28.5, sodium_mg=850.0),
    )
    data = menu.to_dict()
    assert list(data) == ["date", "main_dish", "side_dishes", "soup", "nutrition"]
    assert data["date"] == "2025-01-13T00:00:00Z"
    assert data["side_dishes"] == ["おひたし", "白米"]
    assert "dessert" not in data
    assert data["nutrition"] == {
        "calories": 650,
        "protein_g": 28.5,
        "carbs_g": 0.0,
        "fat_g": 0.0,
        "fiber_g": 0.0,
        "sodium_mg": 850.0,
        "vegetables_servings": 0,
    }


def test_school_lunch_menu_display():
    menu = SchoolLunchMenu(
        date=datetime(2025, 1, 13, tzinfo=timezone.utc),
        main_dish="カレーライス",
        side_dishes=["サラダ"],
        dessert="ヨーグルト",
    )
    text = menu.display()
    assert "2025年01月13日" in text
    assert "カレーライス" in text
    assert "ヨーグルト" in text
    assert "汁物" not in text


def test_home_menu_suggestion_to_dict():
    s = HomeMenuSuggestion(
        date=date(2025, 1, 13),
        meal_type="dinner",
        school_lunch_ref="鶏肉の照り焼き",
        main_dish="魚の煮付け",
        side_dishes=["野菜の天ぷら", "白米"],
        soup="すまし汁",
        reason="理由",
    )
    data = s.to_dict()
    assert data["date"] == "2025-01-13T00:00:00Z"
    assert data["soup"] == "すまし汁"
    assert data["school_lunch_ref"] == "鶏肉の照り焼き"


def test_home_menu_suggestion_display_empty():
    """A suggestion with no dishes says so instead of printing blanks."""
    s = HomeMenuSuggestion(date=date(2025, 1, 13), meal_type="lunch", school_lunch_ref="x")
    assert "提案できる献立がありません" in s.display()


def test_document_source_defaults_and_to_dict():
    doc = DocumentSource(
        id="doc_1",
        type="json",
        original_name="menu.json",
        uploaded_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    assert doc.status == "pending"
    data = doc.to_dict()
    assert "processed_at" not in data
    assert "error_message" not in data
    assert data["status"] == "pending"
