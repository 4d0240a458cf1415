"""
Иерархия ошибок приложения.

Ошибки конфигурации и подключения возникают до запуска меню и завершают
процесс. Ошибки хранилища (StoreError и наследники) перехватываются
драйвером меню, выводятся пользователю, после чего цикл продолжается.
Ошибки разбора ввода исключениями не являются: см. domain.ParseError.
"""


class ExpenseTrackerError(Exception):
    """Базовая ошибка приложения."""


class ConfigError(ExpenseTrackerError):
    """Базовая ошибка конфигурации."""


class ConfigMissing(ConfigError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read config file {path}: {reason}")


class ConfigIncomplete(ConfigError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Missing required config key: {key}")


class StoreError(ExpenseTrackerError):
    """
    Ошибка, сообщённая драйвером БД.

    Parameters
    ----------
    operation : str
        Контекст операции для пользователя, например "Error adding expense".
    detail : str
        Текст ошибки драйвера.
    """

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}")


class ConnectError(StoreError):
    pass


class SchemaError(StoreError):
    pass


class WriteError(StoreError):
    pass


class ReadError(StoreError):
    pass
