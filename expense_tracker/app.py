"""
Сборка приложения и цикл меню.

MenuDriver — конечный автомат: из MENU выбор пользователя ведёт в одно из
состояний ADD/LIST/FILTER/TOTAL, каждое из которых возвращает управление
в MENU; EXIT — терминальное состояние. Ошибки хранилища внутри цикла
выводятся пользователю и не завершают процесс.
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

from expense_tracker.config.config import Config, load_config
from expense_tracker.console import formatter
from expense_tracker.console.reader import InputReader
from expense_tracker.core.errors import ExpenseTrackerError, StoreError
from expense_tracker.core.logger import setup_logger
from expense_tracker.handlers import Handler, HandlerContext, State, register_handlers
from expense_tracker.storage.storage import ExpenseRepository

logger = logging.getLogger(__name__)


class MenuDriver:
    """
    Интерактивный цикл меню поверх ExpenseRepository.

    Parameters
    ----------
    store : ExpenseRepository
        Хранилище с уже созданной схемой.
    reader : InputReader
        Источник пользовательского ввода.
    output : TextIO
        Поток для вывода меню, таблиц и сообщений.
    """

    def __init__(self, store: ExpenseRepository, reader: InputReader, output: TextIO) -> None:
        self._context = HandlerContext(store=store, reader=reader, output=output)
        self._handlers: dict[State, Handler] = register_handlers()
        self.state = State.MENU

    def step(self) -> State:
        """Выполнить обработчик текущего состояния и перейти в следующее."""
        handler = self._handlers[self.state]
        try:
            next_state = handler(self._context)
        except StoreError as exc:
            self._context.say(formatter.format_error(exc))
            logger.warning("Ошибка БД в состоянии %s: %s", self.state.name, exc)
            next_state = State.MENU
        except EOFError:
            logger.info("Ввод закончился, выходим")
            next_state = State.EXIT

        logger.debug("Переход %s -> %s", self.state.name, next_state.name)
        self.state = next_state
        return next_state

    def run(self) -> None:
        while self.state is not State.EXIT:
            self.step()
        self._handlers[State.EXIT](self._context)


def create_application(
    config: Config,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> tuple[ExpenseRepository, MenuDriver]:
    """
    Подключиться к БД, подготовить схему и собрать драйвер меню.

    Returns
    -------
    tuple[ExpenseRepository, MenuDriver]
        Хранилище (владелец соединения, закрывается вызывающим) и драйвер.

    Raises
    ------
    ConnectError
        Не удалось подключиться к БД.
    SchemaError
        Не удалось создать таблицу; соединение при этом закрывается.
    """
    output = stdout if stdout is not None else sys.stdout
    store = ExpenseRepository.from_config(config)
    try:
        store.ensure_schema()
    except (StoreError, KeyboardInterrupt):
        store.close()
        raise
    print(formatter.SCHEMA_READY, file=output)

    reader = InputReader(stdin, output)
    return store, MenuDriver(store, reader, output)


def main(
    config_path: Path | str | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Главная точка входа. Возвращает код завершения процесса."""
    output = stdout if stdout is not None else sys.stdout
    logger = setup_logger()

    try:
        config = load_config(config_path)
        setup_logger(level=config.log_level)
        logger.info("🚀 Запускаем Expense Tracker...")
        store, driver = create_application(config, stdin, output)
    except ExpenseTrackerError as e:
        print(f"Could not run the app: {e}", file=output)
        logger.error("Ошибка запуска: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("🛑 Остановка по Ctrl+C до запуска меню")
        return 0

    try:
        with store:
            driver.run()
    except KeyboardInterrupt:
        logger.info("🛑 Остановка по Ctrl+C")
    except Exception as e:
        logger.error(f"💥 Критическая ошибка: {e}", exc_info=True)
        return 1

    return 0
