"""Participant Lifecycle — создание и чтение записей участников.

create:
- ровно 3 аргумента (name, category, balance), все непустые
- balance — целое (строгий разбор, int64)
- category нормализуется к lowercase
- существующий ключ не перезаписывается (AlreadyExistsError)
- ровно одна запись в хранилище при успехе

read:
- ровно 1 аргумент (name)
- возвращает сохранённые байты без изменений
"""

import logging
from typing import Sequence

from src.core.domain.participant import Participant
from src.core.math.taxation import parse_int
from src.ledger.access import fetch_existing, fetch_raw, store_put
from src.ledger.errors import (
    AlreadyExistsError,
    ArgumentCountError,
    ArgumentEmptyError,
    ArgumentTypeError,
)
from src.ledger.store import LedgerStore

logger = logging.getLogger(__name__)

_ORDINALS = ("1st", "2nd", "3rd")


class ParticipantLifecycle:
    """Операции над одиночными записями участников."""

    def __init__(self, store: LedgerStore):
        self.store = store

    def create(self, args: Sequence[str]) -> Participant:
        """Создание участника.

        Args:
            args: [name, category, balance]

        Returns:
            Сохранённая запись участника

        Raises:
            ArgumentCountError, ArgumentEmptyError, ArgumentTypeError,
            AlreadyExistsError, StorageError
        """
        if len(args) != 3:
            raise ArgumentCountError(
                "Incorrect number of arguments. Expecting 3 (Name, Type, Balance)"
            )

        logger.info("start init participant")
        for ordinal, value in zip(_ORDINALS, args):
            if not value:
                raise ArgumentEmptyError(f"{ordinal} argument must be a non-empty string")

        name = args[0]
        category = args[1].lower()
        try:
            balance = parse_int(args[2])
        except ValueError as e:
            raise ArgumentTypeError("3rd argument must be a numeric string") from e

        if fetch_raw(self.store, name) is not None:
            logger.info("participant already exists: %s", name)
            raise AlreadyExistsError(f"This Participant already exists: {name}")

        participant = Participant(name=name, category=category, balance=balance)
        store_put(self.store, name, participant.to_bytes())

        logger.info("end init participant: %s", name)
        return participant

    def read(self, args: Sequence[str]) -> bytes:
        """Чтение участника.

        Args:
            args: [name]

        Returns:
            Закодированная запись участника (как в хранилище)

        Raises:
            ArgumentCountError, NotFoundError, StorageError
        """
        if len(args) != 1:
            raise ArgumentCountError(
                "Incorrect number of arguments. Expecting name of the Participant to query"
            )
        return fetch_existing(self.store, args[0])
