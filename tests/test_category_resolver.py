"""Tests for mapping free text to a category slug."""

import pytest
from spendwise.domain.category_resolver import (
    IMPORT_KEYWORDS,
    match_category,
    resolve_category,
)
from spendwise.domain.entities import DEFAULT_CATEGORIES, Category


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Netflix subscription", "entertainment"),
        ("Flight to Goa", "travel"),
        ("Pharmacy run", "health"),
        ("school fees", "education"),
        ("new clothes", "shopping"),
    ],
)
def test_parser_keywords(text, expected):
    """Typed keywords map to their category, case-insensitively."""
    assert resolve_category(text) == expected


def test_fallback_is_other():
    """Unrecognised or empty text resolves to 'other'."""
    assert resolve_category("random stuff") == "other"
    assert resolve_category("") == "other"


def test_fallback_slug_inside_words_does_not_match():
    """"mother" and "another" do not select the fallback before keywords."""
    assert resolve_category("medicine for my mother", DEFAULT_CATEGORIES) == "health"
    assert resolve_category("another thing", DEFAULT_CATEGORIES) == "other"
    assert match_category("another thing", DEFAULT_CATEGORIES).span is None


def test_first_keyword_group_wins():
    """Groups are tried in table order, so food beats transport."""
    assert resolve_category("uber food order") == "food"


def test_supplied_category_wins_over_keywords():
    """A category name in the text beats the keyword table."""
    categories = (Category("gym", "Gym"),)
    assert resolve_category("gym membership doctor", categories) == "gym"


def test_label_match_reports_span():
    """The span points at the matched label in the lowered text."""
    match = match_category("Paid Bills & Utilities", DEFAULT_CATEGORIES)

    assert match.value == "bills"
    assert match.span == (5, 22)


def test_fallback_has_no_span():
    """Nothing is removed from the description for a fallback."""
    assert match_category("xyz").span is None


@pytest.mark.parametrize(
    "description,expected",
    [
        ("SWIGGY ORDER 1234", "food"),
        ("Petrol pump HP", "transport"),
        ("FLIPKART INTERNET", "shopping"),
        ("Electricity board", "bills"),
        ("Indigo flight", "travel"),
        ("खाना delivery", "food"),
        ("UPI/123/misc", "other"),
    ],
)
def test_import_keywords(description, expected):
    """Bank narrations use the merchant keyword table."""
    assert resolve_category(description, keywords=IMPORT_KEYWORDS) == expected
