"""
Логирование приложения.

Стандартный вывод занят меню, поэтому записи уходят в stderr. Модули берут
логгер через logging.getLogger(__name__); setup_logger() вызывается при старте
и повторно, когда из конфигурации известен log.level.
"""

import logging
import sys
from typing import Final
from logging import Logger, StreamHandler


LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(message)s"
DEFAULT_LEVEL: Final[str] = "WARNING"

LOG_LEVELS: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_level(level: str | None) -> int:
    """Вернуть числовой уровень logging; неизвестные значения -> WARNING."""
    if not level:
        return LOG_LEVELS[DEFAULT_LEVEL]
    return LOG_LEVELS.get(level.strip().upper(), LOG_LEVELS[DEFAULT_LEVEL])


def setup_logger(name: str = "expense_tracker", level: str | None = DEFAULT_LEVEL) -> Logger:
    """
    Сконфигурировать корневой логгер (stderr, LOG_FORMAT) и вернуть логгер name.

    level разбирается через resolve_level(): регистр не важен, пустое или
    неизвестное значение даёт WARNING. Предыдущая конфигурация заменяется.
    """
    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stderr)],
        force=True,  # Явно перезаписывает предыдущую конфигурацию logging
    )

    return logging.getLogger(name)
