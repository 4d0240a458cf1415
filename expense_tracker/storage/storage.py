"""
Хранилище расходов в реляционной БД (SQLAlchemy Core).

Модуль инкапсулирует всю работу с базой данных расходов:
- подключение по URL из конфигурации (одно соединение на процесс);
- инициализацию схемы (создание таблицы expenses при первом запуске);
- добавление новых записей о тратах;
- выборку всех расходов и фильтр по категории без учёта регистра;
- сумму всех расходов.

Основной класс — ExpenseRepository. Он владеет соединением и предоставляет
простой API для остального приложения, не раскрывая деталей SQL. Все
запросы параметризованы; пользовательский ввод никогда не подставляется
в текст SQL.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date

from sqlalchemy import (
    Column,
    Date,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    event,
    func,
    insert,
    select,
)
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.config.config import Config
from expense_tracker.core.errors import (
    ConnectError,
    ReadError,
    SchemaError,
    StoreError,
    WriteError,
)
from expense_tracker.domain.domain import CATEGORY_MAX_LENGTH, Expense

logger = logging.getLogger(__name__)

metadata = MetaData()

expenses = Table(
    "expenses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("category", String(CATEGORY_MAX_LENGTH), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("date", Date, nullable=False),
    sqlite_autoincrement=True,  # id никогда не переиспользуется
)


def _driver_detail(exc: SQLAlchemyError) -> str:
    """Текст ошибки самого драйвера, без обёртки SQLAlchemy."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_conn, connection_record) -> None:
    """Встроенный lower() в SQLite складывает только ASCII; подменяем на str.lower."""
    dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)


def create_db_engine(config: Config) -> Engine:
    """
    Создать Engine по параметрам конфигурации.

    Непустые db.user и db.password проставляются в URL; для SQLite они
    обычно пустые и игнорируются.

    Raises
    ------
    ConnectError
        URL некорректен, диалект неизвестен или не установлен DBAPI-драйвер.
    """
    try:
        url = make_url(config.db_url)
        if config.db_user:
            url = url.set(username=config.db_user)
        if config.db_password:
            url = url.set(password=config.db_password)
        return create_engine(url)
    except (SQLAlchemyError, ModuleNotFoundError) as exc:
        detail = _driver_detail(exc) if isinstance(exc, SQLAlchemyError) else str(exc)
        raise ConnectError("Could not connect to the database", detail) from exc


class ExpenseRepository:
    """
    Репозиторий для работы с таблицей расходов.

    Открывает одно соединение при создании и держит его до close().
    Каждая операция выполняется в собственной транзакции, результаты
    полностью выбираются до возврата, курсоры закрываются внутри операции.

    Parameters
    ----------
    engine : Engine
        Engine SQLAlchemy. Репозиторий становится его владельцем и
        освобождает пул соединений при закрытии.

    Raises
    ------
    ConnectError
        Если не удалось установить соединение.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        if engine.dialect.name == "sqlite" and not event.contains(
            engine, "connect", _register_sqlite_functions
        ):
            event.listen(engine, "connect", _register_sqlite_functions)
        try:
            self._conn: Connection | None = engine.connect()
        except SQLAlchemyError as exc:
            engine.dispose()
            raise ConnectError("Could not connect to the database", _driver_detail(exc)) from exc
        logger.info("Соединение с БД открыто: %s", engine.url.render_as_string(hide_password=True))

    @classmethod
    def from_config(cls, config: Config) -> "ExpenseRepository":
        return cls(create_db_engine(config))

    def __enter__(self) -> "ExpenseRepository":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        """Закрыть соединение и освободить Engine. Повторный вызов ничего не делает."""
        if self._conn is None:
            return
        try:
            self._conn.close()
        finally:
            self._conn = None
            self._engine.dispose()
            logger.info("Соединение с БД закрыто")

    @contextmanager
    def _transaction(self, error_cls: type[StoreError], operation: str) -> Iterator[Connection]:
        """
        Выполнить блок в отдельной транзакции на единственном соединении.

        Ошибки драйвера переводятся в error_cls с контекстом operation;
        транзакция при этом откатывается.

        Yields
        ------
        Connection
            Соединение с открытой транзакцией.
        """
        if self._conn is None:
            raise error_cls(operation, "connection is closed")
        try:
            with self._conn.begin():
                yield self._conn
        except SQLAlchemyError as exc:
            logger.error("%s: %s", operation, exc)
            raise error_cls(operation, _driver_detail(exc)) from exc

    def ensure_schema(self) -> None:
        """
        Создать таблицу expenses, если её ещё нет.

        Автоинкремент id рендерится диалектом: SERIAL в PostgreSQL,
        INTEGER PRIMARY KEY AUTOINCREMENT в SQLite.
        """
        with self._transaction(SchemaError, "Could not create table") as conn:
            metadata.create_all(conn, checkfirst=True)
        logger.info("Таблица expenses готова")

    def add(self, category: str, amount: int, expense_date: date) -> int:
        """
        Добавить расход.

        Значения не перепроверяются: валидация выполняется до вызова.

        Returns
        -------
        int
            Количество вставленных строк (1 при успехе).
        """
        stmt = insert(expenses).values(category=category, amount=amount, date=expense_date)
        with self._transaction(WriteError, "Error adding expense") as conn:
            result = conn.execute(stmt)
            rows = result.rowcount
        logger.debug("Расход добавлен: %r %s %s", category, amount, expense_date)
        return rows

    def list_all(self) -> list[Expense]:
        """Все расходы, от новых к старым (date DESC, затем id DESC)."""
        stmt = select(expenses).order_by(expenses.c.date.desc(), expenses.c.id.desc())
        with self._transaction(ReadError, "Error loading expenses") as conn:
            rows = conn.execute(stmt).all()
        logger.debug("Загружено расходов: %d", len(rows))
        return [self._to_expense(row) for row in rows]

    def filter_by_category(self, category: str) -> list[Expense]:
        """
        Расходы, категория которых совпадает с category без учёта регистра.

        Сравнение — равенство lower(category) = lower(:category) на стороне
        БД, поэтому `%` и `_` здесь обычные символы, а не шаблоны.
        Для SQLite lower() регистрируется заново и учитывает Unicode.
        Пустой результат ошибкой не считается.
        """
        stmt = (
            select(expenses)
            .where(func.lower(expenses.c.category) == func.lower(category))
            .order_by(expenses.c.date.desc(), expenses.c.id.desc())
        )
        with self._transaction(ReadError, "Error filtering expenses") as conn:
            rows = conn.execute(stmt).all()
        logger.debug("Найдено по категории %r: %d", category, len(rows))
        return [self._to_expense(row) for row in rows]

    def sum_amount(self) -> int:
        """Сумма всех amount; 0 для пустой таблицы."""
        stmt = select(func.coalesce(func.sum(expenses.c.amount), 0))
        with self._transaction(ReadError, "Could not calculate total spending") as conn:
            total = conn.execute(stmt).scalar()
        return int(total or 0)

    @staticmethod
    def _to_expense(row) -> Expense:
        return Expense(
            id=row.id,
            category=row.category,
            amount=row.amount,
            date=row.date,
        )
