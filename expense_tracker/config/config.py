"""
Конфигурация приложения: параметры подключения к БД из файла key=value.

Файл разбирается через python-dotenv (dotenv_values) без подстановки
переменных: строки вида `key=value`, `#` начинает комментарий, пробелы
вокруг `=` игнорируются, неизвестные ключи пропускаются.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from dotenv import dotenv_values

from expense_tracker.core.errors import ConfigIncomplete, ConfigMissing
from expense_tracker.core.logger import DEFAULT_LEVEL

logger = logging.getLogger(__name__)

CONFIG_CANDIDATES: Final[tuple[Path, ...]] = (
    Path("config.properties"),
    Path("src") / "config.properties",
)
REQUIRED_KEYS: Final[tuple[str, ...]] = ("db.url", "db.user", "db.password")


@dataclass(frozen=True)
class Config:
    db_url: str
    db_user: str
    db_password: str = field(repr=False)
    log_level: str = DEFAULT_LEVEL

    @classmethod
    def from_mapping(cls, values: dict[str, str | None]) -> "Config":
        """
        Собрать конфигурацию из разобранных пар ключ/значение.

        Ключ без `=` dotenv возвращает со значением None; такой ключ
        считается отсутствующим. Пустое значение допустимо.

        Raises
        ------
        ConfigIncomplete
            Если не хватает обязательного ключа (указывается первый по порядку
            REQUIRED_KEYS).
        """
        for key in REQUIRED_KEYS:
            if values.get(key) is None:
                raise ConfigIncomplete(key)

        return cls(
            db_url=values["db.url"],
            db_user=values["db.user"],
            db_password=values["db.password"],
            log_level=values.get("log.level") or DEFAULT_LEVEL,
        )


def find_config(candidates: tuple[Path, ...] = CONFIG_CANDIDATES) -> Path:
    """Первый существующий кандидат или, если нет ни одного, первый по списку."""
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return candidates[0]


def load_config(path: Path | str | None = None) -> Config:
    """
    Прочитать файл конфигурации.

    Parameters
    ----------
    path : Path | str | None, optional
        Явный путь к файлу. Если не задан, используется find_config().

    Returns
    -------
    Config
        Неизменяемая конфигурация приложения.

    Raises
    ------
    ConfigMissing
        Файл не удалось открыть или прочитать.
    ConfigIncomplete
        В файле нет одного из обязательных ключей.
    """
    config_path = Path(path) if path is not None else find_config()

    try:
        with open(config_path, encoding="utf-8") as fh:
            values = dotenv_values(stream=fh, interpolate=False)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigMissing(str(config_path), str(exc)) from exc

    logger.debug("Конфиг прочитан: %s (%d ключей)", config_path, len(values))
    return Config.from_mapping(dict(values))
