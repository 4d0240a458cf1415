from datetime import date

import pytest
from sqlalchemy import create_engine, text

from expense_tracker.config.config import Config
from expense_tracker.core.errors import ConnectError, ReadError, WriteError
from expense_tracker.storage.storage import ExpenseRepository


def _drop_table(db_url):
    engine = create_engine(db_url)
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE expenses"))
    engine.dispose()


def test_add_then_list_round_trip(store):
    assert store.add("Food", 15, date(2024, 1, 10)) == 1

    rows = store.list_all()
    assert len(rows) == 1
    expense = rows[0]
    assert (expense.category, expense.amount, expense.date) == ("Food", 15, date(2024, 1, 10))
    assert expense.id >= 1


def test_ids_are_unique(store):
    for i in range(5):
        store.add("Food", i, date(2024, 1, 1))
    ids = [expense.id for expense in store.list_all()]
    assert len(set(ids)) == 5


def test_list_all_orders_by_date_descending(store):
    store.add("a", 1, date(2024, 1, 10))
    store.add("b", 2, date(2025, 3, 1))
    store.add("c", 3, date(2023, 7, 4))
    store.add("d", 4, date(2024, 1, 10))

    dates = [expense.date for expense in store.list_all()]
    assert dates == sorted(dates, reverse=True)
    assert store.list_all() == store.list_all()


def test_sum_matches_listed_amounts(store):
    assert store.sum_amount() == 0
    assert store.list_all() == []

    store.add("Food", 15, date(2024, 1, 10))
    store.add("Refund", -5, date(2024, 1, 11))
    store.add("Rent", 1000, date(2024, 2, 1))
    assert store.sum_amount() == sum(expense.amount for expense in store.list_all()) == 1010


def test_filter_is_case_insensitive_equality(store):
    store.add("Food", 15, date(2024, 1, 10))
    store.add("food", 20, date(2024, 1, 12))
    store.add("Fast food", 7, date(2024, 1, 11))
    store.add("Transport", 3, date(2024, 1, 9))

    rows = store.filter_by_category("FOOD")
    assert [expense.amount for expense in rows] == [20, 15]
    assert all(expense.category.lower() == "food" for expense in rows)


def test_filter_without_matches_is_empty(store):
    store.add("Food", 15, date(2024, 1, 10))
    assert store.filter_by_category("Transport") == []


def test_filter_does_not_treat_wildcards_as_patterns(store):
    store.add("Food", 15, date(2024, 1, 10))
    store.add("100%", 1, date(2024, 1, 10))

    assert store.filter_by_category("%") == []
    assert store.filter_by_category("F__d") == []
    assert [expense.category for expense in store.filter_by_category("100%")] == ["100%"]


@pytest.mark.parametrize(
    "category",
    ["'; DROP TABLE expenses; --", "O'Brien", "x' OR '1'='1", "a--b;"],
)
def test_sql_metacharacters_are_stored_verbatim(store, category):
    store.add(category, 1, date.today())

    rows = store.list_all()
    assert len(rows) == 1
    assert rows[0].category == category
    assert [expense.category for expense in store.filter_by_category(category)] == [category]


def test_ensure_schema_is_idempotent(store):
    store.add("Food", 15, date(2024, 1, 10))
    store.ensure_schema()
    assert len(store.list_all()) == 1


def test_read_error_carries_operation_and_driver_detail(store, db_url):
    _drop_table(db_url)
    with pytest.raises(ReadError) as excinfo:
        store.list_all()
    assert str(excinfo.value).startswith("Error loading expenses: ")
    assert "expenses" in excinfo.value.detail


def test_write_error_on_driver_failure(store, db_url):
    _drop_table(db_url)
    with pytest.raises(WriteError) as excinfo:
        store.add("Food", 15, date(2024, 1, 10))
    assert excinfo.value.operation == "Error adding expense"


def test_store_recovers_after_failed_statement(store, db_url):
    _drop_table(db_url)
    with pytest.raises(ReadError):
        store.sum_amount()
    store.ensure_schema()
    assert store.sum_amount() == 0


def test_close_is_idempotent(store):
    store.close()
    store.close()
    assert store.closed
    with pytest.raises(ReadError):
        store.list_all()


@pytest.mark.parametrize(
    "url",
    ["not a url", "nosuchdialect://localhost/db"],
)
def test_from_config_reports_connect_errors(url):
    config = Config(db_url=url, db_user="", db_password="")
    with pytest.raises(ConnectError) as excinfo:
        ExpenseRepository.from_config(config)
    assert excinfo.value.operation == "Could not connect to the database"


def test_from_config_unreachable_database(tmp_path):
    missing = tmp_path / "missing" / "dir" / "expenses.db"
    config = Config(db_url=f"sqlite:///{missing}", db_user="", db_password="")
    with pytest.raises(ConnectError):
        ExpenseRepository.from_config(config)


def test_from_config_connects_sqlite(db_url):
    config = Config(db_url=db_url, db_user="", db_password="")
    with ExpenseRepository.from_config(config) as repo:
        repo.ensure_schema()
        assert repo.sum_amount() == 0
    assert repo.closed


@pytest.mark.parametrize(
    "stored, query",
    [("Еда", "ЕДА"), ("Café", "CAFÉ"), ("ТРАНСПОРТ", "транспорт")],
)
def test_filter_folds_non_ascii_case(store, stored, query):
    store.add(stored, 15, date(2024, 1, 10))
    store.add("Other", 1, date(2024, 1, 10))

    assert [expense.category for expense in store.filter_by_category(query)] == [stored]
