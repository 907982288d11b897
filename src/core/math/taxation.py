"""
Taxation — целочисленная арифметика переводов

Модуль содержит примитивы, на которых строится Transfer Engine:
- Разбор целых чисел из строковых аргументов (строгий формат)
- Расчёт налога с перевода и чистой суммы к зачислению

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. tax + net == amount для любого amount
2. Налог считается целочисленно: tax = (amount * rate_pct) // 100 (floor)
3. Все операции детерминированы, float не используется
"""

import re
from typing import Final

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Ставка налога по умолчанию (проценты, целое)
DEFAULT_TAX_RATE_PCT: Final[int] = 2

# Границы знакового 64-битного целого (диапазон хранимых балансов)
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Опциональный знак + ASCII цифры. Пробелы и "_" не допускаются.
_INT_PATTERN: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# РАЗБОР ЦЕЛЫХ
# =============================================================================


def parse_int(text: str) -> int:
    """
    Строгий разбор целого числа из строки.

    В отличие от int(), не принимает пробелы по краям, разделители "_"
    и не-ASCII цифры.

    Args:
        text: Строковое представление числа

    Returns:
        Целое значение в диапазоне int64

    Raises:
        ValueError: Если строка не является целым числом или выходит за int64

    Examples:
        >>> parse_int("500")
        500
        >>> parse_int("-7")
        -7
    """
    if not isinstance(text, str) or _INT_PATTERN.fullmatch(text) is None:
        raise ValueError(f"not an integer: {text!r}")

    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


# =============================================================================
# НАЛОГ
# =============================================================================


def compute_tax(amount: int, rate_pct: int = DEFAULT_TAX_RATE_PCT) -> int:
    """
    Налог с перевода.

    tax = (amount * rate_pct) // 100 — floor division.

    Args:
        amount: Сумма перевода
        rate_pct: Ставка налога в процентах [0, 100]

    Returns:
        Сумма налога

    Examples:
        >>> compute_tax(100)
        2
        >>> compute_tax(49)
        0
    """
    if rate_pct < 0 or rate_pct > 100:
        raise ValueError(f"rate_pct must be in [0, 100], got {rate_pct}")
    return (amount * rate_pct) // 100


def tax_split(amount: int, rate_pct: int = DEFAULT_TAX_RATE_PCT) -> tuple[int, int]:
    """
    Разделение суммы перевода на налог и чистую сумму.

    Returns:
        (tax, net), где tax + net == amount
    """
    tax = compute_tax(amount, rate_pct)
    return tax, amount - tax
