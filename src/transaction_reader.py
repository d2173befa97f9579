import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from models import Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


def read_transactions(stream: TextIO) -> Iterator[Transaction]:
    """
    Yield transactions from a CSV stream with a `type, client, tx, amount` header,
    in file order. Malformed rows are logged and skipped.
    """
    reader = csv.DictReader(stream)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.warning(f"Failed to read line {reader.line_num}: {e}")
            continue

        transaction = parse_row(row)
        if transaction:
            yield transaction


def parse_row(row: Dict[Optional[str], object]) -> Optional[Transaction]:
    """Parse CSV row into Transaction."""
    try:
        # DictReader files surplus values under the None key.
        extra_values = row.get(None) or []
        if any(value.strip() for value in extra_values):
            raise ValueError(f"unexpected extra columns {extra_values}")

        normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

        transaction_type_str = normalized["type"].lower()
        client_id = _parse_id(normalized["client"], MAX_CLIENT_ID)
        transaction_id = _parse_id(normalized["tx"], MAX_TRANSACTION_ID)

        amount = None
        amount_str = normalized.get("amount", "")
        if amount_str:
            amount = Decimal(amount_str)
            if not amount.is_finite():
                raise ValueError(f"amount {amount_str} is not a finite number")

        return Transaction(
            transaction_type=TransactionType(transaction_type_str),
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.warning(f"Failed to parse row {row}: {e}")
        return None


def _parse_id(value: str, upper_bound: int) -> int:
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"id {value!r} is not an unsigned integer")
    parsed = int(value)
    if not 0 <= parsed <= upper_bound:
        raise ValueError(f"id {parsed} outside 0..{upper_bound}")
    return parsed
