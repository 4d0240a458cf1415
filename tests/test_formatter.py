from datetime import date

from expense_tracker.console import formatter
from expense_tracker.domain.domain import Expense, ParseError


def test_table_layout_uses_fixed_widths():
    table = formatter.format_table(
        [
            Expense(id=1, category="Food", amount=15, date=date(2024, 1, 10)),
            Expense(id=12, category="Transport", amount=-300, date=date(2023, 12, 31)),
        ]
    )
    lines = table.splitlines()
    assert lines[0] == "ID" + " " * 4 + "Category" + " " * 8 + "Amount" + " " * 5 + "Date"
    assert lines[1] == "1" + " " * 5 + "Food" + " " * 12 + "15" + " " * 9 + "2024-01-10"
    assert lines[2] == "12" + " " * 4 + "Transport" + " " * 7 + "-300" + " " * 7 + "2023-12-31"


def test_table_columns_line_up():
    table = formatter.format_table([Expense(id=3, category="Rent", amount=1000, date=date(2024, 2, 1))])
    header, row = table.splitlines()
    for column in ("Category", "Amount", "Date"):
        assert row[header.index(column) - 1] == " "
    assert row.index("Rent") == header.index("Category")
    assert row.index("1000") == header.index("Amount")
    assert row.index("2024-02-01") == header.index("Date")


def test_empty_table_is_only_header():
    assert formatter.format_table([]).splitlines() == ["ID    Category        Amount     Date"]


def test_status_lines():
    assert formatter.format_total(0) == "💰 Total Spending: 0"
    assert formatter.format_added(1) == "✅ Expense added (1 row(s) affected)"
    assert formatter.format_not_found("Transport") == "No expenses found for category: Transport"


def test_parse_error_messages_are_keyed_by_field():
    assert formatter.format_parse_error(ParseError("amount", "abc")) == "Invalid amount. Must be an integer."
    assert formatter.format_parse_error(ParseError("date", "x")) == "Invalid date format. Use YYYY-MM-DD."
    assert "category" in formatter.format_parse_error(ParseError("category", "x" * 101))


def test_menu_lists_five_options():
    for line in ("1. Add expense", "4. Calculate total spending", "5. Exit"):
        assert line in formatter.MENU_TEXT.splitlines()
    assert formatter.MENU_PROMPT.startswith("Choose an option")
