import io

import pytest
from sqlalchemy import create_engine

from expense_tracker.app import MenuDriver
from expense_tracker.console.reader import InputReader
from expense_tracker.storage.storage import ExpenseRepository


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'expenses.db'}"


@pytest.fixture
def store(db_url):
    repo = ExpenseRepository(create_engine(db_url))
    repo.ensure_schema()
    yield repo
    repo.close()


@pytest.fixture
def write_config(tmp_path):
    def _write(text, name="config.properties"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def run_menu(store):
    """Прогнать сценарий ввода через драйвер меню и вернуть весь вывод."""

    def _run(text):
        out = io.StringIO()
        driver = MenuDriver(store, InputReader(io.StringIO(text), out), out)
        driver.run()
        return out.getvalue()

    return _run
