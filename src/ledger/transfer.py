"""Transfer Engine — перевод пунктов между участниками с налогом.

Порядок проверок (каждая прерывает операцию при отказе):
1. Sender: чтение записи (NotFound / Storage)
2. Receiver: чтение записи (NotFound / Storage)
3. Tax Authority: чтение записи по зарезервированному ключу (NotFound / Storage)
4. Декодирование всех трёх записей (Serialization)
5. Sender или receiver в категории налогового органа → CategoryRestriction
6. Баланс sender < amount → InsufficientBalance
7. Списание с sender
8. Receiver tax-exempt → зачисление всей суммы, налоговый орган не пишется.
   Иначе tax = (amount * rate) // 100, receiver += amount - tax,
   налоговый орган += tax
9-10. Запись sender и receiver

Записи 8-10 собираются в WriteSet. AtomicLedgerStore получает их одним
commit(), иначе put выполняются последовательно (authority, sender,
receiver) и уже выполненные put при отказе следующего не откатываются.

Записи с совпадающими ключами (например, sender == receiver) изменяются
как одна локальная копия, поэтому изменения не теряются.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from pydantic import ValidationError

from src.core.domain.participant import Participant
from src.core.math.taxation import parse_int, tax_split
from src.ledger.access import apply_write_set, decode_record, fetch_existing
from src.ledger.config import LedgerConfig
from src.ledger.errors import (
    ArgumentCountError,
    ArgumentTypeError,
    BalanceOverflowError,
    CategoryRestrictionError,
    InsufficientBalanceError,
)
from src.ledger.store import LedgerStore, WriteSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferResult:
    """Результат перевода."""

    amount: int
    tax: int
    net: int
    tax_exempt: bool

    # Записи после перевода
    sender: Participant
    receiver: Participant
    tax_authority: Participant

    # Балансы до перевода
    sender_balance_before: int
    receiver_balance_before: int
    tax_authority_balance_before: int

    # Ключи в порядке записи в хранилище
    written_keys: tuple[str, ...]


class TransferEngine:
    """Перевод пунктов sender → receiver с налогом в пользу налогового органа."""

    def __init__(self, store: LedgerStore, config: LedgerConfig | None = None):
        self.store = store
        self.config = config or LedgerConfig()

    def transfer(self, args: Sequence[str]) -> TransferResult:
        """Выполнение перевода.

        Args:
            args: [sender, receiver, amount, ...] — лишние аргументы игнорируются

        Returns:
            TransferResult с итоговыми записями и суммами

        Raises:
            ArgumentCountError, ArgumentTypeError, BalanceOverflowError,
            NotFoundError, StorageError, SerializationError,
            CategoryRestrictionError, InsufficientBalanceError
        """
        if len(args) < 3:
            raise ArgumentCountError("Incorrect number of arguments. Expecting 3")

        cfg = self.config
        sender_key, receiver_key, amount_text = args[0], args[1], args[2]
        authority_key = cfg.tax_authority_key
        amount = self._parse_amount(amount_text)

        logger.info("start Points Transfer %s %s %s", sender_key, receiver_key, amount_text)

        # 1-3. Чтение записей
        sender_raw = fetch_existing(self.store, sender_key, "Sender")
        receiver_raw = fetch_existing(self.store, receiver_key, "Receiver")
        authority_raw = fetch_existing(self.store, authority_key, "Tax Authority")

        # 4. Декодирование
        sender = decode_record(sender_raw, sender_key)
        receiver = decode_record(receiver_raw, receiver_key)
        authority = decode_record(authority_raw, authority_key)

        # 5. Налоговый орган не участвует в переводах
        if self._is_category(sender, cfg.tax_authority_category) or self._is_category(
            receiver, cfg.tax_authority_category
        ):
            raise CategoryRestrictionError(
                "Tax Authority cannot participate in any transaction"
            )

        # 6. Достаточность баланса
        if sender.balance < amount:
            raise InsufficientBalanceError(
                "There is not enough balance in the sender account"
            )

        # Локальные копии по ключу: совпадающие ключи дают одну запись
        local: dict[str, Participant] = {sender_key: sender}
        local.setdefault(receiver_key, receiver)
        local.setdefault(authority_key, authority)

        writes = WriteSet()
        tax_exempt = self._is_category(receiver, cfg.tax_exempt_category)
        try:
            # 7. Списание
            local[sender_key] = local[sender_key].debited(amount)

            # 8. Зачисление (с налогом или без)
            if tax_exempt:
                tax, net = 0, amount
                local[receiver_key] = local[receiver_key].credited(net)
            else:
                tax, net = tax_split(amount, cfg.tax_rate_pct)
                local[receiver_key] = local[receiver_key].credited(net)
                local[authority_key] = local[authority_key].credited(tax)
        except ValidationError as e:
            raise BalanceOverflowError(
                f"transfer amount {amount} overflows the balance range"
            ) from e

        if not tax_exempt:
            writes.stage(authority_key, local[authority_key].to_bytes())
        # 9-10. sender, receiver
        writes.stage(sender_key, local[sender_key].to_bytes())
        writes.stage(receiver_key, local[receiver_key].to_bytes())

        written = apply_write_set(self.store, writes, atomic=cfg.atomic_commit)

        logger.info(
            "end transferPoints (success): amount=%d tax=%d net=%d exempt=%s",
            amount, tax, net, tax_exempt,
        )
        return TransferResult(
            amount=amount,
            tax=tax,
            net=net,
            tax_exempt=tax_exempt,
            sender=local[sender_key],
            receiver=local[receiver_key],
            tax_authority=local[authority_key],
            sender_balance_before=sender.balance,
            receiver_balance_before=receiver.balance,
            tax_authority_balance_before=authority.balance,
            written_keys=tuple(written),
        )

    def _parse_amount(self, text: str) -> int:
        try:
            return parse_int(text)
        except ValueError as e:
            if self.config.strict_amount_parsing:
                raise ArgumentTypeError("3rd argument must be a numeric string") from e
            logger.warning("unparsed transfer amount %r, using 0", text)
            return 0

    def _is_category(self, participant: Participant, marker: str) -> bool:
        return participant.has_category(
            marker, case_insensitive=self.config.case_insensitive_categories
        )
