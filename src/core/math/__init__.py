"""
Core math modules для ledger

Целочисленные примитивы переводов: разбор аргументов и расчёт налога.
"""

from src.core.math.taxation import (
    DEFAULT_TAX_RATE_PCT,
    INT64_MAX,
    INT64_MIN,
    compute_tax,
    parse_int,
    tax_split,
)

__all__ = [
    "DEFAULT_TAX_RATE_PCT",
    "INT64_MAX",
    "INT64_MIN",
    "compute_tax",
    "parse_int",
    "tax_split",
]
