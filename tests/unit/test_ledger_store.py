"""
Тесты для Ledger Store: InMemoryLedgerStore, WriteSet, store access

Coverage:
- get/put, версии ключей, atomic commit
- Протоколы LedgerStore / AtomicLedgerStore
- WriteSet: порядок и замена значений
- Оборачивание отказов хранилища в StorageError
- Последовательная запись write-set и окно частичного применения
"""

import logging

import pytest

from src.core.domain import Participant
from src.ledger.access import (
    apply_write_set,
    decode_record,
    fetch_existing,
    fetch_raw,
    store_put,
)
from src.ledger.errors import NotFoundError, SerializationError, StorageError
from src.ledger.store import AtomicLedgerStore, InMemoryLedgerStore, LedgerStore, WriteSet


class PlainStore:
    """Хранилище без commit(): только get/put."""

    def __init__(self, fail_on_put: str | None = None):
        self.data: dict[str, bytes] = {}
        self.puts: list[str] = []
        self.fail_on_put = fail_on_put

    def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    def put(self, key: str, value: bytes) -> None:
        if key == self.fail_on_put:
            raise IOError(f"disk full while writing {key}")
        self.puts.append(key)
        self.data[key] = value


class BrokenStore:
    def get(self, key: str) -> bytes | None:
        raise ConnectionError("peer unavailable")

    def put(self, key: str, value: bytes) -> None:
        raise ConnectionError("peer unavailable")

    def commit(self, writes) -> None:
        raise ConnectionError("peer unavailable")


# =============================================================================
# IN-MEMORY STORE
# =============================================================================


class TestInMemoryLedgerStore:
    """Тесты для InMemoryLedgerStore"""

    def test_get_missing_returns_none(self) -> None:
        assert InMemoryLedgerStore().get("nobody") is None

    def test_put_then_get(self) -> None:
        store = InMemoryLedgerStore()
        store.put("Alice", b"{}")
        assert store.get("Alice") == b"{}"
        assert "Alice" in store
        assert len(store) == 1

    def test_versions_increment_per_put(self) -> None:
        store = InMemoryLedgerStore()
        assert store.version("Alice") == 0
        store.put("Alice", b"1")
        store.put("Alice", b"2")
        assert store.version("Alice") == 2

    def test_initial_data(self) -> None:
        store = InMemoryLedgerStore({"b": b"2", "a": b"1"})
        assert store.keys() == ["a", "b"]
        assert store.snapshot() == {"a": b"1", "b": b"2"}

    def test_commit_applies_all(self) -> None:
        store = InMemoryLedgerStore()
        store.commit([("a", b"1"), ("b", b"2")])
        assert store.snapshot() == {"a": b"1", "b": b"2"}
        assert store.version("a") == 1

    def test_commit_is_all_or_nothing(self) -> None:
        store = InMemoryLedgerStore({"a": b"0"})
        with pytest.raises(TypeError):
            store.commit([("a", b"1"), ("b", "not bytes")])  # type: ignore
        assert store.snapshot() == {"a": b"0"}

    @pytest.mark.parametrize("key", ["", None])
    def test_invalid_key(self, key) -> None:
        with pytest.raises(ValueError):
            InMemoryLedgerStore().put(key, b"x")

    def test_protocols(self) -> None:
        assert isinstance(InMemoryLedgerStore(), AtomicLedgerStore)
        assert isinstance(PlainStore(), LedgerStore)
        assert not isinstance(PlainStore(), AtomicLedgerStore)


# =============================================================================
# WRITE-SET
# =============================================================================


class TestWriteSet:
    """Тесты для WriteSet"""

    def test_order_preserved(self) -> None:
        writes = WriteSet()
        writes.stage("TaxAuth", b"t")
        writes.stage("Alice", b"a")
        writes.stage("Bob", b"b")
        assert writes.keys() == ["TaxAuth", "Alice", "Bob"]
        assert len(writes) == 3

    def test_restage_replaces_value_keeps_position(self) -> None:
        writes = WriteSet()
        writes.stage("Alice", b"1")
        writes.stage("Bob", b"2")
        writes.stage("Alice", b"3")
        assert list(writes) == [("Alice", b"3"), ("Bob", b"2")]


# =============================================================================
# STORE ACCESS
# =============================================================================


class TestStoreAccess:
    """Оборачивание отказов хранилища"""

    def test_fetch_raw_missing(self) -> None:
        assert fetch_raw(InMemoryLedgerStore(), "x") is None

    def test_fetch_existing_missing(self) -> None:
        with pytest.raises(NotFoundError, match="Sender does not exist: x"):
            fetch_existing(InMemoryLedgerStore(), "x", "Sender")

    def test_get_failure_wrapped(self) -> None:
        with pytest.raises(StorageError, match="Failed to get Receiver") as exc_info:
            fetch_raw(BrokenStore(), "x", "Receiver")
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_put_failure_wrapped(self) -> None:
        with pytest.raises(StorageError):
            store_put(BrokenStore(), "x", b"1")

    def test_decode_failure(self) -> None:
        with pytest.raises(SerializationError):
            decode_record(b"garbage", "x")

    def test_decode_ok(self) -> None:
        p = Participant(name="Alice", category="normal", balance=1)
        assert decode_record(p.to_bytes(), "Alice") == p


class TestApplyWriteSet:
    """Запись write-set: atomic commit и последовательные put"""

    @staticmethod
    def _writes() -> WriteSet:
        writes = WriteSet()
        writes.stage("TaxAuth", b"t")
        writes.stage("Alice", b"a")
        writes.stage("Bob", b"b")
        return writes

    def test_atomic_commit(self) -> None:
        store = InMemoryLedgerStore()
        written = apply_write_set(store, self._writes())
        assert written == ["TaxAuth", "Alice", "Bob"]
        assert store.keys() == ["Alice", "Bob", "TaxAuth"]

    def test_commit_failure_wrapped(self) -> None:
        with pytest.raises(StorageError, match="Failed to commit 3 writes"):
            apply_write_set(BrokenStore(), self._writes())

    def test_sequential_when_store_has_no_commit(self) -> None:
        store = PlainStore()
        written = apply_write_set(store, self._writes())
        assert written == ["TaxAuth", "Alice", "Bob"]
        assert store.puts == ["TaxAuth", "Alice", "Bob"]

    def test_sequential_when_atomic_disabled(self) -> None:
        store = InMemoryLedgerStore()
        apply_write_set(store, self._writes(), atomic=False)
        assert store.version("TaxAuth") == 1

    def test_partial_failure_keeps_earlier_writes(self, caplog) -> None:
        store = PlainStore(fail_on_put="Alice")
        with caplog.at_level(logging.WARNING, logger="src.ledger.access"):
            with pytest.raises(StorageError):
                apply_write_set(store, self._writes())
        # TaxAuth уже записан, Bob не записан: отката нет
        assert store.puts == ["TaxAuth"]
        assert "Bob" not in store.data
        assert "partially applied" in caplog.text
