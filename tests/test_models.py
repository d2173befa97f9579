import sys
import os
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    APPLIED,
    ClientAccount,
    ProcessingResult,
    ProcessingStats,
    RejectionReason,
    Transaction,
    TransactionType,
)


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Decimal("100.0")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None

    def test_immutable(self):
        transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("1"))
        with pytest.raises(FrozenInstanceError):
            transaction.amount = Decimal("2")


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.total == Decimal("0")
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Decimal("100"),
            held=Decimal("50"),
        )
        assert account.total == Decimal("150")

    def test_hold_keeps_total(self):
        account = ClientAccount(client_id=1, available=Decimal("10"))
        account.hold(Decimal("4"))
        assert (account.available, account.held, account.total) == (Decimal("6"), Decimal("4"), Decimal("10"))

        account.release_hold(Decimal("4"))
        assert (account.available, account.held, account.total) == (Decimal("10"), Decimal("0"), Decimal("10"))

    def test_add_and_remove_held_move_total(self):
        account = ClientAccount(client_id=1, available=Decimal("10"))
        account.add_held(Decimal("3"))
        assert account.available == Decimal("10")
        assert account.total == Decimal("13")

        account.remove_held(Decimal("3"))
        assert account.total == Decimal("10")


class TestProcessingResult:
    def test_applied(self):
        assert APPLIED.applied is True
        assert APPLIED.reason is None

    def test_rejected(self):
        result = ProcessingResult.rejected(RejectionReason.INSUFFICIENT_FUNDS)
        assert result.applied is False
        assert result.reason == RejectionReason.INSUFFICIENT_FUNDS

    def test_reason_values(self):
        assert RejectionReason.DUPLICATE_TRANSACTION.value == "duplicate_transaction"
        assert RejectionReason.NOT_DISPUTED.value == "not_disputed"


class TestProcessingStats:
    def test_counts(self):
        stats = ProcessingStats()
        stats.record_result(APPLIED)
        stats.record_result(ProcessingResult.rejected(RejectionReason.NOT_DISPUTED))
        stats.record_invalid()

        assert stats.applied == 1
        assert stats.rejected == 1
        assert stats.invalid == 1
