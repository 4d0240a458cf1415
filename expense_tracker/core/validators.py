"""
Валидаторы пользовательского ввода.

Каждый парсер принимает уже обрезанную строку и возвращает либо значение,
либо ParseError с именем поля. Исключения наружу не выбрасываются.
"""

import re
from datetime import date
from typing import Final

from expense_tracker.domain.domain import (
    AMOUNT_MAX,
    AMOUNT_MIN,
    CATEGORY_MAX_LENGTH,
    ParseError,
)

_AMOUNT_RE: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+")
_DATE_RE: Final[re.Pattern[str]] = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def parse_amount(text: str) -> int | ParseError:
    """Целое со знаком "-" или без, только ASCII-цифры, в пределах int32."""
    if not _AMOUNT_RE.fullmatch(text):
        return ParseError("amount", text)
    amount = int(text)
    if not AMOUNT_MIN <= amount <= AMOUNT_MAX:
        return ParseError("amount", text)
    return amount


def parse_date(text: str) -> date | ParseError:
    """Дата строго в виде YYYY-MM-DD с проверкой календаря."""
    match = _DATE_RE.fullmatch(text)
    if match is None:
        return ParseError("date", text)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return ParseError("date", text)


def parse_category(text: str) -> str | ParseError:
    if len(text) > CATEGORY_MAX_LENGTH:
        return ParseError("category", text)
    return text
