"""Map free text to a category slug.

Resolution order:
1. the first supplied category, other than the fallback, whose label or
   slug occurs in the text
2. the first keyword group with a hit, in table order
3. ``"other"``
"""

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from spendwise.domain.entities import Category

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "other"

KeywordTable = tuple[tuple[str, tuple[str, ...]], ...]

# Keywords recognised in typed input.
PARSER_KEYWORDS: KeywordTable = (
    ("food", ("food", "grocery", "restaurant")),
    ("transport", ("transport", "bus", "train", "uber", "taxi", "cab")),
    ("shopping", ("shop", "clothes", "amazon", "mall")),
    ("entertainment", ("entertainment", "movie", "cinema", "netflix")),
    ("health", ("health", "doctor", "pharmacy", "medicine")),
    ("bills", ("bill", "utility", "electric", "water", "gas bill")),
    ("education", ("education", "school", "college", "course")),
    ("travel", ("travel", "flight", "hotel", "trip")),
)

# Merchant and narration keywords seen in bank statement descriptions.
IMPORT_KEYWORDS: KeywordTable = (
    ("food", ("restaurant", "food", "meal", "dining", "cafe", "pizza", "burger",
              "swiggy", "zomato", "khana", "खाना")),
    ("transport", ("uber", "ola", "metro", "bus", "train", "fuel", "petrol",
                   "diesel", "parking", "transport", "यातायात")),
    ("shopping", ("amazon", "flipkart", "myntra", "shopping", "clothes", "shoes",
                  "bag", "watch", "jewelry", "शॉपिंग")),
    ("entertainment", ("netflix", "prime", "hotstar", "movie", "cinema", "theatre",
                       "game", "entertainment", "मनोरंजन")),
    ("health", ("pharmacy", "medicine", "doctor", "hospital", "gym", "fitness",
                "health", "medical", "स्वास्थ्य")),
    ("bills", ("electricity", "water", "gas", "internet", "phone", "bill",
               "utility", "recharge", "बिल")),
    ("education", ("book", "course", "tuition", "college", "university",
                   "education", "study", "शिक्षा")),
    ("travel", ("flight", "hotel", "booking", "travel", "vacation", "trip", "यात्रा")),
)


@dataclass(frozen=True)
class CategoryMatch:
    """Resolved category and the span of text that selected it.

    ``span`` is ``None`` when nothing matched and the fallback was used.
    """

    value: str
    span: Optional[tuple[int, int]] = None


@lru_cache(maxsize=None)
def _patterns(table: KeywordTable) -> tuple[tuple[str, re.Pattern], ...]:
    return tuple(
        (value, re.compile("|".join(re.escape(word) for word in words)))
        for value, words in table
    )


def _match_supplied(text: str, categories: Iterable[Category]) -> Optional[CategoryMatch]:
    for category in categories:
        # The fallback would hit inside "mother" or "another".
        if category.value == FALLBACK_CATEGORY:
            continue
        for needle in (category.label.lower(), category.value.lower()):
            if not needle:
                continue
            index = text.find(needle)
            if index >= 0:
                return CategoryMatch(category.value, (index, index + len(needle)))
    return None


def match_category(
    text: str,
    categories: Iterable[Category] = (),
    keywords: KeywordTable = PARSER_KEYWORDS,
) -> CategoryMatch:
    """Resolve ``text`` to a category, keeping the matched span.

    Spans index into ``text.lower()``.
    """
    lowered = text.lower()

    supplied = _match_supplied(lowered, categories)
    if supplied is not None:
        return supplied

    for value, pattern in _patterns(keywords):
        hit = pattern.search(lowered)
        if hit is not None:
            logger.debug("Keyword %r selected category %s", hit.group(0), value)
            return CategoryMatch(value, hit.span())

    return CategoryMatch(FALLBACK_CATEGORY)


def resolve_category(
    description: str,
    categories: Iterable[Category] = (),
    keywords: KeywordTable = PARSER_KEYWORDS,
) -> str:
    """Return the category slug for ``description``; never empty."""
    return match_category(description, categories, keywords).value
