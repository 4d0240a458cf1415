"""
Общие типы обработчиков: состояния меню и контекст выполнения.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from expense_tracker.console.reader import InputReader
from expense_tracker.storage.storage import ExpenseRepository


class State(Enum):
    MENU = "menu"
    ADD = "add"
    LIST = "list"
    FILTER = "filter"
    TOTAL = "total"
    EXIT = "exit"


@dataclass
class HandlerContext:
    store: ExpenseRepository
    reader: InputReader
    output: TextIO

    def say(self, text: str) -> None:
        print(text, file=self.output)


Handler = Callable[[HandlerContext], State]
