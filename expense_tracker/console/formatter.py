"""
Форматирование вывода для терминала фиксированной ширины.

Функции чистые: возвращают строки, а печатает их вызывающий код.
"""

from collections.abc import Iterable
from typing import Final

from expense_tracker.domain.domain import Expense, ParseError

ROW_FORMAT: Final[str] = "{:<5} {:<15} {:<10} {:<12}"

MENU_TEXT: Final[str] = "\n".join(
    [
        "",
        "--- Expense Tracker ---",
        "1. Add expense",
        "2. Show all expenses",
        "3. Filter by category",
        "4. Calculate total spending",
        "5. Exit",
    ],
)
MENU_PROMPT: Final[str] = "Choose an option: "

PARSE_ERROR_MESSAGES: Final[dict[str, str]] = {
    "amount": "Invalid amount. Must be an integer.",
    "date": "Invalid date format. Use YYYY-MM-DD.",
    "category": "Invalid category. Use at most 100 characters.",
}

SCHEMA_READY: Final[str] = "Table 'expenses' is ready."
INVALID_OPTION: Final[str] = "Select a valid option (1-5)."
FAREWELL: Final[str] = "Closing the app."


def format_row(expense: Expense) -> str:
    return ROW_FORMAT.format(
        expense.id,
        expense.category,
        expense.amount,
        expense.date.isoformat(),
    ).rstrip()


def format_table(expenses: Iterable[Expense]) -> str:
    """Заголовок ID/Category/Amount/Date и по строке на каждый расход."""
    lines = [ROW_FORMAT.format("ID", "Category", "Amount", "Date").rstrip()]
    lines.extend(format_row(expense) for expense in expenses)
    return "\n".join(lines)


def format_total(total: int) -> str:
    return f"💰 Total Spending: {total}"


def format_added(rows: int) -> str:
    return f"✅ Expense added ({rows} row(s) affected)"


def format_not_found(category: str) -> str:
    return f"No expenses found for category: {category}"


def format_parse_error(error: ParseError) -> str:
    return PARSE_ERROR_MESSAGES.get(error.field, f"Invalid {error.field}.")


def format_error(error: Exception) -> str:
    return f"❌ {error}"
