import logging
from dataclasses import replace
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional

from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

# Amounts carry at most four places past the decimal point.
AMOUNT_PRECISION = Decimal("0.0001")
# Wide enough for any amount the ledger can hold exactly.
AMOUNT_CONTEXT = Context(prec=50)

AMOUNT_TRANSACTION_TYPES = (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


def validate_transaction(transaction: Transaction) -> Optional[Transaction]:
    """
    Check a parsed transaction before it reaches the processor.

    Deposits and withdrawals need an amount that is still positive after
    rounding to four decimal places; the returned transaction carries the
    rounded amount. Disputes, resolves and chargebacks always pass.
    Returns None when the transaction must be dropped.
    """
    if transaction.transaction_type not in AMOUNT_TRANSACTION_TYPES:
        return transaction

    if transaction.amount is None:
        logger.info(f"Dropping {transaction}: missing amount")
        return None

    try:
        amount = transaction.amount.quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_EVEN, context=AMOUNT_CONTEXT)
    except InvalidOperation:
        logger.info(f"Dropping {transaction}: amount out of range")
        return None

    if amount <= 0:
        logger.info(f"Dropping {transaction}: amount must be positive")
        return None

    return replace(transaction, amount=amount)
