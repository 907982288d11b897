"""Ledger errors — типизированная иерархия отказов операций ledger.

Каждая ошибка терминальна для текущей операции: повторов и откатов внутри
ядра нет. Operation surface превращает LedgerError в failure-результат
с message и code.
"""


class LedgerError(Exception):
    """Базовая ошибка операций ledger."""

    code = "ledger_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ArgumentCountError(LedgerError):
    """Неверное количество аргументов операции."""

    code = "argument_count"


class ArgumentEmptyError(LedgerError):
    """Обязательный строковый аргумент пуст."""

    code = "argument_empty"


class ArgumentTypeError(LedgerError):
    """Числовой аргумент не разбирается как целое."""

    code = "argument_type"


class BalanceOverflowError(ArgumentTypeError):
    """Сумма разобрана, но зачисление или списание выводит баланс за int64."""

    code = "balance_overflow"


class AlreadyExistsError(LedgerError):
    """create на ключ, под которым уже есть запись."""

    code = "already_exists"


class NotFoundError(LedgerError):
    """Запись по ключу отсутствует."""

    code = "not_found"


class SerializationError(LedgerError):
    """Сохранённые байты не декодируются в запись."""

    code = "serialization"


class CategoryRestrictionError(LedgerError):
    """Отправитель или получатель — налоговый орган."""

    code = "category_restriction"


class InsufficientBalanceError(LedgerError):
    """Баланс отправителя меньше суммы перевода."""

    code = "insufficient_balance"


class StorageError(LedgerError):
    """Отказ хранилища на get/put/commit."""

    code = "storage"


__all__ = [
    "LedgerError",
    "ArgumentCountError",
    "ArgumentEmptyError",
    "ArgumentTypeError",
    "BalanceOverflowError",
    "AlreadyExistsError",
    "NotFoundError",
    "SerializationError",
    "CategoryRestrictionError",
    "InsufficientBalanceError",
    "StorageError",
]
