import logging
from typing import Iterable, List

from models import ClientAccount, ProcessingStats, Transaction
from ledger_store import LedgerStore
from transaction_log import TransactionLog
from transaction_processor import TransactionProcessor
from transaction_reader import read_transactions
from validation import validate_transaction

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays a transaction stream, strictly in order, against fresh ledger state.
    One engine per run: the ledger store and transaction log are owned here.
    """

    def __init__(self):
        self._ledger = LedgerStore()
        self._log = TransactionLog()
        self._processor = TransactionProcessor(self._ledger, self._log)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[ClientAccount]:
        """Process CSV file and return final account states ordered by client id."""
        with open(filepath, "r", newline="", encoding="utf-8", errors="replace") as f:
            return self.process_stream(read_transactions(f))

    def process_stream(self, transactions: Iterable[Transaction]) -> List[ClientAccount]:
        """Apply each transaction in order, then snapshot the ledger."""
        logger.info("Starting processing")

        for transaction in transactions:
            self.process_transaction(transaction)

        logger.info(
            f"Processing complete. Applied: {self._stats.applied}, "
            f"Rejected: {self._stats.rejected}, "
            f"Invalid: {self._stats.invalid}"
        )
        return self._ledger.snapshot()

    def process_transaction(self, transaction: Transaction) -> None:
        validated = validate_transaction(transaction)
        if validated is None:
            self._stats.record_invalid()
            return

        result = self._processor.process_transaction(validated)
        self._stats.record_result(result)
