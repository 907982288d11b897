"""Operation surface — закрытый набор операций ledger и таблица обработчиков.

Диспетчер платформы передаёт имя функции и список строковых аргументов;
LedgerService.invoke возвращает OperationResult (success с опциональным
payload или failure с сообщением). LedgerError превращается в failure,
прочие исключения пробрасываются.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from src.ledger.config import LedgerConfig
from src.ledger.errors import LedgerError
from src.ledger.lifecycle import ParticipantLifecycle
from src.ledger.store import LedgerStore
from src.ledger.transfer import TransferEngine

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """Операции ledger."""

    CREATE = "create"
    READ = "read"
    TRANSFER = "transfer"

    @classmethod
    def from_name(cls, name: str) -> "Operation | None":
        """Операция по имени функции (включая legacy имена), None если неизвестна."""
        return _OPERATION_NAMES.get(name)


_OPERATION_NAMES: dict[str, Operation] = {
    "create": Operation.CREATE,
    "initParty": Operation.CREATE,
    "read": Operation.READ,
    "readParty": Operation.READ,
    "transfer": Operation.TRANSFER,
    "transferPoints": Operation.TRANSFER,
}


@dataclass(frozen=True)
class OperationResult:
    """Результат операции для диспетчера."""

    ok: bool
    payload: bytes | None = None
    message: str = ""
    error_code: str = ""

    @classmethod
    def success(cls, payload: bytes | None = None) -> "OperationResult":
        return cls(ok=True, payload=payload)

    @classmethod
    def failure(cls, message: str, error_code: str = "") -> "OperationResult":
        return cls(ok=False, message=message, error_code=error_code)


Handler = Callable[[Sequence[str]], bytes | None]


class LedgerService:
    """Точка входа операций ledger поверх одного хранилища."""

    def __init__(self, store: LedgerStore, config: LedgerConfig | None = None):
        self.config = config or LedgerConfig()
        self.lifecycle = ParticipantLifecycle(store)
        self.transfers = TransferEngine(store, self.config)

        self._handlers: dict[Operation, Handler] = {
            Operation.CREATE: self._create,
            Operation.READ: self.lifecycle.read,
            Operation.TRANSFER: self._transfer,
        }
        missing = set(Operation) - set(self._handlers)
        if missing:
            raise RuntimeError(f"no handler for operations: {sorted(op.value for op in missing)}")

    def invoke(self, function: str, args: Sequence[str]) -> OperationResult:
        """Вызов операции по имени функции."""
        logger.info("invoke is running %s", function)

        operation = Operation.from_name(function)
        if operation is None:
            logger.info("invoke did not find func: %s", function)
            return OperationResult.failure(
                "Received unknown function invocation", error_code="unknown_function"
            )
        return self.execute(operation, args)

    def execute(self, operation: Operation, args: Sequence[str]) -> OperationResult:
        try:
            payload = self._handlers[operation](list(args))
        except LedgerError as e:
            logger.info("%s failed: %s", operation.value, e.message)
            return OperationResult.failure(e.message, error_code=e.code)
        return OperationResult.success(payload)

    def _create(self, args: Sequence[str]) -> None:
        self.lifecycle.create(args)
        return None

    def _transfer(self, args: Sequence[str]) -> None:
        self.transfers.transfer(args)
        return None
