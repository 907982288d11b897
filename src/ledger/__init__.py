"""Ledger — участники, их жизненный цикл и переводы пунктов с налогом.

- Participant Lifecycle: create / read
- Transfer Engine: transfer (sender, receiver, налоговый орган)
- Operation surface: закрытый набор операций для диспетчера
"""

from .config import LedgerConfig
from .errors import (
    AlreadyExistsError,
    ArgumentCountError,
    ArgumentEmptyError,
    ArgumentTypeError,
    BalanceOverflowError,
    CategoryRestrictionError,
    InsufficientBalanceError,
    LedgerError,
    NotFoundError,
    SerializationError,
    StorageError,
)
from .lifecycle import ParticipantLifecycle
from .operations import LedgerService, Operation, OperationResult
from .store import AtomicLedgerStore, InMemoryLedgerStore, LedgerStore, WriteSet
from .transfer import TransferEngine, TransferResult

__all__ = [
    "LedgerConfig",
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
    "ParticipantLifecycle",
    "TransferEngine",
    "TransferResult",
    "LedgerService",
    "Operation",
    "OperationResult",
    "LedgerStore",
    "AtomicLedgerStore",
    "InMemoryLedgerStore",
    "WriteSet",
]
