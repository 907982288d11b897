"""
Contract Validation Module

Модуль для валидации JSON контрактов хранимых записей ledger.
"""

from .validators import (
    ContractValidator,
    ParticipantValidator,
    SchemaLoader,
    validate_participant,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ParticipantValidator",
    # Functions
    "validate_participant",
]
