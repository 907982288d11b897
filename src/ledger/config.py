"""Конфигурация ledger: налоговый орган, ставка, режимы совместимости."""

from dataclasses import dataclass

from src.core.math.taxation import DEFAULT_TAX_RATE_PCT


@dataclass(frozen=True)
class LedgerConfig:
    """Конфигурация Participant Lifecycle и Transfer Engine.

    Поля:
    - tax_authority_key: зарезервированный ключ записи налогового органа
    - tax_authority_category / tax_exempt_category: маркеры категорий
    - tax_rate_pct: ставка налога (целые проценты, 0-100)
    - case_insensitive_categories: сравнение категорий с маркерами без учёта
      регистра. False — буквальное сравнение: категории хранятся в lowercase,
      поэтому маркеры "TaxAuth"/"TaxExempt" никогда не совпадают
    - strict_amount_parsing: False — нераспознанная сумма перевода считается 0,
      True — ArgumentTypeError
    - atomic_commit: передавать write-set перевода одним commit(), если
      хранилище его поддерживает
    """

    tax_authority_key: str = "TaxAuth"
    tax_authority_category: str = "TaxAuth"
    tax_exempt_category: str = "TaxExempt"
    tax_rate_pct: int = DEFAULT_TAX_RATE_PCT
    case_insensitive_categories: bool = True
    strict_amount_parsing: bool = False
    atomic_commit: bool = True

    def __post_init__(self):
        if not self.tax_authority_key:
            raise ValueError("tax_authority_key must be a non-empty string")
        if not self.tax_authority_category or not self.tax_exempt_category:
            raise ValueError("category markers must be non-empty strings")
        if self.tax_rate_pct < 0 or self.tax_rate_pct > 100:
            raise ValueError(f"tax_rate_pct must be in [0, 100], got {self.tax_rate_pct}")
