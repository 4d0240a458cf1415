from dataclasses import dataclass
from datetime import date
from typing import Final


CATEGORY_MAX_LENGTH: Final[int] = 100
AMOUNT_MIN: Final[int] = -(2**31)
AMOUNT_MAX: Final[int] = 2**31 - 1


@dataclass(frozen=True)
class Expense:
    id: int
    category: str
    amount: int
    date: date


@dataclass(frozen=True)
class ParseError:
    field: str  # "amount", "date" или "category"
    value: str
