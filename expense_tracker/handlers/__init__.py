"""
Handlers Registry
Единая точка регистрации всех handlers
"""

from expense_tracker.handlers.commands import exit_app, show_menu
from expense_tracker.handlers.context import Handler, HandlerContext, State
from expense_tracker.handlers.expenses import (
    add_expense,
    filter_by_category,
    show_all,
    show_total,
)

__all__ = ["Handler", "HandlerContext", "State", "register_handlers"]


def register_handlers() -> dict[State, Handler]:
    """Регистрация всех handlers: состояние -> обработчик."""
    return {
        State.MENU: show_menu,
        State.ADD: add_expense,
        State.LIST: show_all,
        State.FILTER: filter_by_category,
        State.TOTAL: show_total,
        State.EXIT: exit_app,
    }
