from typing import Dict, Optional, Set

from models import Transaction


class TransactionLog:
    """
    Accepted deposits and withdrawals keyed by transaction id,
    plus the set of transaction ids currently under dispute.
    """

    def __init__(self):
        self._transactions: Dict[int, Transaction] = {}
        self._disputed_transaction_ids: Set[int] = set()

    def exists(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions

    def store_transaction(self, transaction: Transaction) -> None:
        """Store transaction for future dispute lookups."""
        self._transactions[transaction.transaction_id] = transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Retrieve stored transaction by ID."""
        return self._transactions.get(transaction_id)

    def remove_transaction(self, transaction_id: int) -> None:
        """Forget a transaction so it can no longer be disputed."""
        self._transactions.pop(transaction_id, None)

    def mark_disputed(self, transaction_id: int) -> None:
        self._disputed_transaction_ids.add(transaction_id)

    def is_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self._disputed_transaction_ids

    def unmark_disputed(self, transaction_id: int) -> None:
        self._disputed_transaction_ids.discard(transaction_id)

    def __len__(self) -> int:
        return len(self._transactions)
