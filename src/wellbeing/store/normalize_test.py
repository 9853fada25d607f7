"""
Unit tests for the shared comparison rules.

Run with: pytest src/wellbeing/store/normalize_test.py -v
"""
from datetime import date, datetime

import pytest

from wellbeing.store.normalize import (
    match_key,
    normalize_bool,
    normalize_date,
    normalize_value,
    values_equal,
)
from wellbeing.store.schema import BOOL, DATE, ID, TEXT, TEXT_ARRAY


class TestNormalizeDate:
    """Tests for normalize_date()"""

    @pytest.mark.parametrize("value", [
        date(2024, 1, 10),
        datetime(2024, 1, 10, 23, 59, 59),
        "2024-01-10",
        "2024-01-10T08:30:00Z",
        " 2024-01-10 ",
    ])
    def test_normalize_date_success(self, value):
        assert normalize_date(value) == date(2024, 1, 10)

    def test_normalize_date_returns_plain_date_for_datetime(self):
        result = normalize_date(datetime(2024, 1, 10, 12, 0))

        assert type(result) is date

    @pytest.mark.parametrize("value", [
        "not a date",
        "2024-13-01",
        "2024-01-01garbage",
        "2024-01-10Tnoon",
        20240110,
        None,
    ])
    def test_normalize_date_invalid_raises(self, value):
        with pytest.raises(ValueError, match="Invalid date"):
            normalize_date(value)


class TestNormalizeBool:
    """Tests for normalize_bool()"""

    @pytest.mark.parametrize("value,expected", [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        ("true", True),
        ("FALSE", False),
        ("yes", True),
    ])
    def test_normalize_bool_success(self, value, expected):
        assert normalize_bool(value) is expected

    def test_normalize_bool_invalid_raises(self):
        with pytest.raises(ValueError):
            normalize_bool("maybe")


class TestNormalizeValue:
    """Tests for normalize_value()"""

    def test_text_array_copies_and_stringifies(self):
        source = ["a", 2, None]

        result = normalize_value(TEXT_ARRAY, source)

        assert result == ["a", "2", ""]
        assert result is not source

    def test_text_array_rejects_single_string(self):
        with pytest.raises(ValueError):
            normalize_value(TEXT_ARRAY, "happy")

    def test_none_passes_through(self):
        assert normalize_value(DATE, None) is None

    def test_text_is_kept_verbatim(self):
        assert normalize_value(TEXT, "Observation") == "Observation"


class TestValuesEqual:
    """Tests for values_equal() and match_key()"""

    @pytest.mark.parametrize("kind,left,right", [
        (TEXT, "Observation", "observation"),
        (TEXT, "MOOD", "mOoD"),
        (DATE, date(2024, 1, 10), "2024-01-10"),
        (DATE, datetime(2024, 1, 10, 18, 0), date(2024, 1, 10)),
        (BOOL, True, "true"),
        (TEXT_ARRAY, ["a", "b"], ("a", "b")),
    ])
    def test_values_equal(self, kind, left, right):
        assert values_equal(kind, left, right)

    @pytest.mark.parametrize("kind,left,right", [
        (TEXT, "mood", "moods"),
        (DATE, date(2024, 1, 10), date(2024, 1, 11)),
        (TEXT_ARRAY, ["a", "b"], ["b", "a"]),
        (TEXT, "mood", None),
        (TEXT, "Straße", "STRASSE"),
    ])
    def test_values_not_equal(self, kind, left, right):
        assert not values_equal(kind, left, right)

    def test_ids_compare_exactly(self):
        assert match_key(ID, "abc") == "abc"
        assert not values_equal(ID, "ABC", "abc")

    def test_text_matches_like_sql_lower(self):
        assert match_key(TEXT, "ÄPFEL") == "äpfel"
        assert match_key(TEXT, "Maße") != match_key(TEXT, "MASSE")
