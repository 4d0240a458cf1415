"""
Обработчики навигации: главное меню и выход.

show_menu() печатает меню, читает выбор и возвращает следующее состояние;
неизвестный выбор оставляет пользователя в меню с подсказкой.
"""

import logging
from typing import Final

from expense_tracker.console import formatter
from expense_tracker.handlers.context import HandlerContext, State

logger = logging.getLogger(__name__)

CHOICES: Final[dict[str, State]] = {
    "1": State.ADD,
    "2": State.LIST,
    "3": State.FILTER,
    "4": State.TOTAL,
    "5": State.EXIT,
}


def show_menu(context: HandlerContext) -> State:
    """
    Обработчик состояния MENU.

    Parameters
    ----------
    context : HandlerContext
        Контекст с хранилищем, ридером и потоком вывода.

    Returns
    -------
    State
        Состояние, соответствующее выбору, или MENU при неверном вводе.

    Raises
    ------
    EOFError
        Ввод закончился; драйвер трактует это как выход.
    """
    context.say(formatter.MENU_TEXT)
    choice = context.reader.read_line(formatter.MENU_PROMPT)

    state = CHOICES.get(choice)
    if state is None:
        context.say(formatter.INVALID_OPTION)
        logger.debug("Неверный пункт меню: %r", choice)
        return State.MENU
    return state


def exit_app(context: HandlerContext) -> State:
    context.say(formatter.FAREWELL)
    return State.EXIT
