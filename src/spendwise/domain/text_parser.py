"""Natural-language transaction parser.

Turns input such as ``"spent 50 on groceries yesterday at 18:30"`` into a
``ParsedInput``. Parsing is plain pattern matching and a pure function of
the text, the category snapshot and the reference date.
"""

import logging
import re
from datetime import date
from typing import Any, Iterable, Optional

from spendwise.domain.category_resolver import match_category
from spendwise.domain.entities import DEFAULT_CATEGORIES, Category, ParsedInput
from spendwise.utils.amount_parser import find_amount
from spendwise.utils.date_parser import GENERIC_DATE_WORDS, find_date
from spendwise.utils.time_parser import find_time

logger = logging.getLogger(__name__)

FILLER_WORDS = re.compile(r"\b(?:spent|paid|bought|on|for|at|add)\b")


def _blank_spans(text: str, spans: Iterable[tuple[int, int]]) -> str:
    chars = list(text)
    for start, end in spans:
        for index in range(start, end):
            chars[index] = " "
    return "".join(chars)


def _build_description(
    text: str, spans: list[tuple[int, int]], date_found: bool
) -> Optional[str]:
    remainder = _blank_spans(text, spans)
    if date_found:
        remainder = GENERIC_DATE_WORDS.sub(" ", remainder)
    remainder = FILLER_WORDS.sub(" ", remainder)
    remainder = " ".join(remainder.split())
    return remainder or None


def parse_natural_input(
    text: str,
    categories: Iterable[Category] = DEFAULT_CATEGORIES,
    today: Optional[date] = None,
) -> Optional[ParsedInput]:
    """Extract amount, date, time, category and description from free text.

    Args:
        text: Raw user input
        categories: Snapshot of the active categories; labels and slugs are
            matched before the built-in keyword table
        today: Reference date for "today"/"yesterday"/"last week";
            defaults to the current date

    Returns:
        ParsedInput with the detected fields, or None when the input carries
        no signal at all. The category always resolves (falling back to
        "other"), so in practice only blank input yields None.
    """
    normalized = text.strip().lower()
    if not normalized:
        return None
    if today is None:
        today = date.today()

    spans: list[tuple[int, int]] = []

    parsed_date = None
    date_hit = find_date(normalized, today)
    if date_hit is not None:
        parsed_date, date_span = date_hit
        spans.append(date_span)

    parsed_time = None
    time_hit = find_time(normalized)
    if time_hit is not None:
        parsed_time, time_span = time_hit
        spans.append(time_span)

    # First number anywhere wins, even when it is part of a date or time.
    amount = None
    amount_hit = find_amount(normalized)
    if amount_hit is not None:
        amount, amount_span = amount_hit
        spans.append(amount_span)

    category_hit = match_category(normalized, tuple(categories))
    if category_hit.span is not None:
        spans.append(category_hit.span)

    description = _build_description(normalized, spans, parsed_date is not None)

    result = ParsedInput(
        amount=amount,
        description=description,
        date=parsed_date,
        time=parsed_time,
        category=category_hit.value,
    )
    if not any(value is not None for value in result.to_dict().values()):
        return None

    logger.debug("Parsed %r -> %s", text, result)
    return result


def merge_parsed_input(
    existing: dict[str, Any], parsed: Optional[ParsedInput]
) -> dict[str, Any]:
    """Merge parser output into existing form values.

    Fields the parser did not detect keep their existing value; a None
    result leaves the form untouched.
    """
    if parsed is None:
        return dict(existing)
    return parsed.merge_into(existing)
