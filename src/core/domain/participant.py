"""
Participant — Модель участника ledger

Immutable Pydantic модель, представляющая запись участника в хранилище.
Полная совместимость с JSON Schema (contracts/schema/participant.json).

Хранимая форма (UTF-8 JSON):
    {"docType": "participant", "name": "...", "category": "...", "balance": 0}

docType — маркер вида записи в общем пространстве ключей, поведения не несёт.
"""

import json
from typing import Final, Literal

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field, ValidationError

from src.core.contracts.validators import validate_participant
from src.core.math.taxation import INT64_MAX, INT64_MIN


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

RECORD_KIND_PARTICIPANT: Final[str] = "participant"


class RecordDecodeError(ValueError):
    """Сохранённые байты не декодируются в запись участника."""


# =============================================================================
# PARTICIPANT MODEL
# =============================================================================


class Participant(BaseModel):
    """
    Модель участника.

    Immutable модель (frozen=True). Изменение баланса создаёт новый экземпляр
    (with_balance / credited / debited), исходная запись не меняется.

    Category хранится как есть; нормализация к lowercase выполняется
    на уровне Participant Lifecycle при создании.
    """

    record_kind: Literal["participant"] = Field(
        RECORD_KIND_PARTICIPANT,
        alias="docType",
        description="Вид записи в пространстве ключей",
    )
    name: str = Field(..., min_length=1, description="Уникальное имя, ключ в хранилище")
    category: str = Field(..., min_length=1, description="Категория участника")
    balance: int = Field(
        ..., ge=INT64_MIN, le=INT64_MAX, description="Баланс в пунктах (может быть < 0)"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    # -------------------------------------------------------------------------
    # Категории
    # -------------------------------------------------------------------------

    def has_category(self, marker: str, *, case_insensitive: bool = True) -> bool:
        """
        Сравнение категории с маркером.

        Args:
            marker: Маркер категории (например, "TaxExempt")
            case_insensitive: False — буквальное сравнение строк

        Returns:
            True если категория совпадает с маркером
        """
        if case_insensitive:
            return self.category.lower() == marker.lower()
        return self.category == marker

    # -------------------------------------------------------------------------
    # Баланс
    # -------------------------------------------------------------------------

    def with_balance(self, balance: int) -> "Participant":
        """
        Копия записи с новым балансом.

        Raises:
            ValidationError: Если баланс выходит за диапазон int64
        """
        return Participant.model_validate(
            {**self.model_dump(by_alias=True), "balance": balance}
        )

    def credited(self, amount: int) -> "Participant":
        return self.with_balance(self.balance + amount)

    def debited(self, amount: int) -> "Participant":
        return self.with_balance(self.balance - amount)

    # -------------------------------------------------------------------------
    # Codec
    # -------------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Кодирование в хранимую форму (compact JSON, UTF-8)."""
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Participant":
        """
        Декодирование хранимой формы.

        Порядок: JSON parse → JSON Schema (participant.json) → Pydantic.

        Raises:
            RecordDecodeError: Если байты не являются валидной записью участника
        """
        try:
            document = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise RecordDecodeError(f"invalid JSON in participant record: {e}") from e

        if not isinstance(document, dict):
            raise RecordDecodeError(
                f"participant record must be a JSON object, got {type(document).__name__}"
            )

        try:
            validate_participant(document)
        except SchemaValidationError as e:
            raise RecordDecodeError(f"participant record violates schema: {e.message}") from e

        try:
            return cls.model_validate(document)
        except ValidationError as e:
            raise RecordDecodeError(f"participant record rejected: {e}") from e
