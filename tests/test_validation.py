import sys
import os
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import Transaction, TransactionType
from validation import validate_transaction


class TestValidateTransaction:
    def test_positive_deposit_passes(self):
        transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("1"))

        assert validate_transaction(transaction) == transaction

    def test_amount_rounded_to_four_places(self):
        transaction = Transaction(TransactionType.WITHDRAWAL, 1, 1, Decimal("1.123456"))

        validated = validate_transaction(transaction)
        assert validated.amount == Decimal("1.1235")
        assert transaction.amount == Decimal("1.123456")

    def test_rounding_half_even(self):
        transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("0.00005"))

        assert validate_transaction(transaction) is None

    def test_zero_and_negative_rejected(self):
        for amount in ("0", "-1", "0.00004"):
            transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal(amount))
            assert validate_transaction(transaction) is None

    def test_missing_amount_rejected(self):
        assert validate_transaction(Transaction(TransactionType.DEPOSIT, 1, 1)) is None
        assert validate_transaction(Transaction(TransactionType.WITHDRAWAL, 1, 1)) is None

    def test_amount_out_of_range_rejected(self):
        transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("1" * 47))

        assert validate_transaction(transaction) is None

    def test_dispute_kinds_pass_unconditionally(self):
        for transaction_type in (TransactionType.DISPUTE, TransactionType.RESOLVE, TransactionType.CHARGEBACK):
            transaction = Transaction(transaction_type, 1, 1, Decimal("-5"))
            assert validate_transaction(transaction) is transaction

    def test_large_amount_kept_exact(self):
        transaction = Transaction(TransactionType.DEPOSIT, 1, 1, Decimal("999999999999999999999999.9999"))

        assert validate_transaction(transaction).amount == Decimal("999999999999999999999999.9999")
