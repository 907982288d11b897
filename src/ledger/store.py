"""Ledger Store — контракт keyed byte-хранилища и in-memory реализация.

Инварианты:
- Ядро обращается к хранилищу только через LedgerStore Protocol
- get возвращает None для отсутствующего ключа
- Read-your-writes в пределах одного вызова операции
- Изоляция и optimistic concurrency между вызовами — ответственность
  хранилища, ядро их не реализует

AtomicLedgerStore дополнительно принимает весь write-set одной операцией
commit(): либо применяются все записи, либо ни одной.
"""

import threading
from dataclasses import dataclass, field
from typing import Iterator, Protocol, Sequence, runtime_checkable


@runtime_checkable
class LedgerStore(Protocol):
    """Контракт keyed byte-хранилища (реализуется платформой)."""

    def get(self, key: str) -> bytes | None: ...

    def put(self, key: str, value: bytes) -> None: ...


@runtime_checkable
class AtomicLedgerStore(LedgerStore, Protocol):
    """Хранилище с атомарным commit набора записей."""

    def commit(self, writes: Sequence[tuple[str, bytes]]) -> None: ...


# =============================================================================
# WRITE-SET
# =============================================================================


@dataclass
class WriteSet:
    """Упорядоченный набор записей одной логической операции.

    Повторная запись того же ключа заменяет значение, сохраняя позицию
    первой записи.
    """

    _writes: dict[str, bytes] = field(default_factory=dict)

    def stage(self, key: str, value: bytes) -> None:
        self._writes[key] = value

    def keys(self) -> list[str]:
        return list(self._writes)

    def items(self) -> list[tuple[str, bytes]]:
        return list(self._writes.items())

    def __len__(self) -> int:
        return len(self._writes)

    def __iter__(self) -> Iterator[tuple[str, bytes]]:
        return iter(self.items())


# =============================================================================
# IN-MEMORY STORE
# =============================================================================


class InMemoryLedgerStore:
    """Reference реализация AtomicLedgerStore в памяти процесса.

    Хранит для каждого ключа счётчик версий (инкремент на каждый put).
    RLock защищает словарь от одновременных вызовов из нескольких потоков,
    но не даёт optimistic concurrency между операциями ядра.
    """

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = {}
        self._versions: dict[str, int] = {}
        self._lock = threading.RLock()
        for key, value in (initial or {}).items():
            self.put(key, value)

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self._check_write(key, value)
        with self._lock:
            self._data[key] = bytes(value)
            self._versions[key] = self._versions.get(key, 0) + 1

    def commit(self, writes: Sequence[tuple[str, bytes]]) -> None:
        # Проверяем все записи до применения первой
        for key, value in writes:
            self._check_write(key, value)
        with self._lock:
            for key, value in writes:
                self._data[key] = bytes(value)
                self._versions[key] = self._versions.get(key, 0) + 1

    def version(self, key: str) -> int:
        """Номер версии ключа (0, если ключ не записывался)."""
        with self._lock:
            return self._versions.get(key, 0)

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)

    def snapshot(self) -> dict[str, bytes]:
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    @staticmethod
    def _check_write(key: str, value: bytes) -> None:
        if not isinstance(key, str) or not key:
            raise ValueError(f"store key must be a non-empty string, got {key!r}")
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"store value must be bytes, got {type(value).__name__}")
