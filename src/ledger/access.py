"""Store access — чтение/запись записей участников с типизацией отказов.

Любое исключение хранилища оборачивается в StorageError (исходное
исключение сохраняется как __cause__). Ошибки декодирования становятся
SerializationError.
"""

import logging

from src.core.domain.participant import Participant, RecordDecodeError
from src.ledger.errors import NotFoundError, SerializationError, StorageError
from src.ledger.store import AtomicLedgerStore, LedgerStore, WriteSet

logger = logging.getLogger(__name__)


def fetch_raw(store: LedgerStore, key: str, label: str = "Participant") -> bytes | None:
    """get(key) с оборачиванием отказа хранилища.

    Returns:
        Сохранённые байты или None, если ключ отсутствует
    """
    try:
        return store.get(key)
    except Exception as e:
        raise StorageError(f"Failed to get {label}: {e}") from e


def fetch_existing(store: LedgerStore, key: str, label: str = "Participant") -> bytes:
    """get(key), отсутствие записи даёт NotFoundError."""
    raw = fetch_raw(store, key, label)
    if raw is None:
        raise NotFoundError(f"{label} does not exist: {key}")
    return raw


def decode_record(raw: bytes, key: str) -> Participant:
    try:
        return Participant.from_bytes(raw)
    except RecordDecodeError as e:
        raise SerializationError(f"Failed to decode record {key}: {e}") from e


def store_put(store: LedgerStore, key: str, value: bytes) -> None:
    try:
        store.put(key, value)
    except Exception as e:
        raise StorageError(f"Failed to put {key}: {e}") from e


def apply_write_set(store: LedgerStore, writes: WriteSet, *, atomic: bool = True) -> list[str]:
    """Запись write-set в хранилище.

    atomic=True и хранилище AtomicLedgerStore: один commit().
    Иначе: последовательные put в порядке write-set. Записи, выполненные до
    упавшего put, остаются в хранилище (отката нет).

    Returns:
        Список записанных ключей в порядке записи
    """
    items = writes.items()
    if atomic and isinstance(store, AtomicLedgerStore):
        try:
            store.commit(items)
        except Exception as e:
            raise StorageError(f"Failed to commit {len(items)} writes: {e}") from e
        return [key for key, _ in items]

    written: list[str] = []
    for key, value in items:
        try:
            store_put(store, key, value)
        except StorageError:
            if written:
                logger.warning(
                    "write-set partially applied: written=%s failed=%s", written, key
                )
            raise
        written.append(key)
    return written
