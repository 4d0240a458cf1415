"""
Обработчики операций с расходами: добавление, список, фильтр и сумма.

Каждый обработчик выполняет ровно одно обращение к хранилищу и всегда
возвращает управление в меню. Ошибки разбора ввода обрабатываются здесь же,
ошибки хранилища (StoreError) поднимаются до драйвера меню.
"""

import logging

from expense_tracker.console import formatter
from expense_tracker.core.validators import parse_category
from expense_tracker.domain.domain import ParseError
from expense_tracker.handlers.context import HandlerContext, State

logger = logging.getLogger(__name__)


def _reject(context: HandlerContext, error: ParseError) -> State:
    context.say(formatter.format_parse_error(error))
    logger.warning("Ошибка разбора поля %s: %r", error.field, error.value)
    return State.MENU


def add_expense(context: HandlerContext) -> State:
    """
    Обработчик состояния ADD.

    Логика:
    1. Читает категорию, сумму и дату (три приглашения по порядку).
    2. Любое поле проверяется сразу после ввода; при ошибке остальные поля
       не запрашиваются и вставка не выполняется.
    3. Сохраняет запись и печатает число затронутых строк.

    Parameters
    ----------
    context : HandlerContext
        Контекст выполнения обработчика.

    Returns
    -------
    State
        Всегда State.MENU.
    """
    category = parse_category(context.reader.read_line("Enter expense category: "))
    if isinstance(category, ParseError):
        return _reject(context, category)

    amount = context.reader.read_int("Enter expense amount: ")
    if isinstance(amount, ParseError):
        return _reject(context, amount)

    expense_date = context.reader.read_date("Enter expense date (YYYY-MM-DD): ")
    if isinstance(expense_date, ParseError):
        return _reject(context, expense_date)

    rows = context.store.add(category, amount, expense_date)
    context.say(formatter.format_added(rows))
    logger.info("Расход добавлен: %s %s (%s)", category, amount, expense_date)
    return State.MENU


def show_all(context: HandlerContext) -> State:
    expenses = context.store.list_all()
    context.say(formatter.format_table(expenses))
    return State.MENU


def filter_by_category(context: HandlerContext) -> State:
    """Обработчик состояния FILTER: таблица или сообщение «ничего не найдено»."""
    category = context.reader.read_line("Enter category to filter: ")
    expenses = context.store.filter_by_category(category)

    if not expenses:
        context.say(formatter.format_not_found(category))
        return State.MENU

    context.say(formatter.format_table(expenses))
    return State.MENU


def show_total(context: HandlerContext) -> State:
    total = context.store.sum_amount()
    context.say(formatter.format_total(total))
    return State.MENU
