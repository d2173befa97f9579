import logging
from decimal import Inexact

from models import (
    APPLIED,
    ClientAccount,
    ProcessingResult,
    RejectionReason,
    Transaction,
    TransactionType,
)
from ledger_store import LedgerStore
from transaction_log import TransactionLog

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies validated transactions, one at a time and in stream order,
    to the ledger store and transaction log.

    Each handler mutates a copy of the client's account; the copy is written
    back only when the transaction is applied, so a rejected transaction
    leaves every balance exactly as it was.
    """

    def __init__(self, ledger: LedgerStore, transaction_log: TransactionLog):
        self._ledger = ledger
        self._log = transaction_log

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            APPLIED when balances changed, otherwise a rejected result carrying
            the reason. Rejections are never retried by the caller.
        """
        account = self._ledger.get_or_create_account(transaction.client_id)

        try:
            match transaction.transaction_type:
                case TransactionType.DEPOSIT:
                    result = self._handle_deposit(account, transaction)
                case TransactionType.WITHDRAWAL:
                    result = self._handle_withdrawal(account, transaction)
                case TransactionType.DISPUTE:
                    result = self._handle_dispute(account, transaction)
                case TransactionType.RESOLVE:
                    result = self._handle_resolve(account, transaction)
                case TransactionType.CHARGEBACK:
                    result = self._handle_chargeback(account, transaction)
        except Inexact:
            # Handlers raise before touching the transaction log, or roll it back first.
            result = ProcessingResult.rejected(RejectionReason.PRECISION_EXCEEDED)

        if result.applied:
            self._ledger.put_account(account)
        else:
            logger.info(f"Rejected {transaction}: {result.reason.value}")
        return result

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if self._log.exists(transaction.transaction_id):
            return ProcessingResult.rejected(RejectionReason.DUPLICATE_TRANSACTION)

        account.credit(transaction.amount)
        self._log.store_transaction(transaction)
        return APPLIED

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        if self._log.exists(transaction.transaction_id):
            return ProcessingResult.rejected(RejectionReason.DUPLICATE_TRANSACTION)

        if transaction.amount > account.available:
            return ProcessingResult.rejected(RejectionReason.INSUFFICIENT_FUNDS)

        account.debit(transaction.amount)
        self._log.store_transaction(transaction)
        return APPLIED

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        transaction_id = transaction.transaction_id

        if self._log.is_disputed(transaction_id):
            return ProcessingResult.rejected(RejectionReason.ALREADY_DISPUTED)

        original = self._log.get_transaction(transaction_id)
        if original is None:
            return ProcessingResult.rejected(RejectionReason.TRANSACTION_NOT_FOUND)

        self._log.mark_disputed(transaction_id)

        # Only a client's own transactions are disputable.
        if original.client_id != transaction.client_id:
            self._log.unmark_disputed(transaction_id)
            return ProcessingResult.rejected(RejectionReason.CLIENT_MISMATCH)

        try:
            match original.transaction_type:
                case TransactionType.DEPOSIT:
                    account.hold(original.amount)
                case TransactionType.WITHDRAWAL:
                    # Withdrawn funds already left available; only total is re-inflated.
                    account.add_held(original.amount)
                case _:
                    self._log.unmark_disputed(transaction_id)
                    return ProcessingResult.rejected(RejectionReason.NOT_DISPUTABLE)
        except Inexact:
            self._log.unmark_disputed(transaction_id)
            raise

        return APPLIED

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        transaction_id = transaction.transaction_id

        if not self._log.is_disputed(transaction_id):
            return ProcessingResult.rejected(RejectionReason.NOT_DISPUTED)

        original = self._log.get_transaction(transaction_id)
        match original.transaction_type:
            case TransactionType.DEPOSIT:
                account.release_hold(original.amount)
            case TransactionType.WITHDRAWAL:
                account.remove_held(original.amount)

        self._log.unmark_disputed(transaction_id)
        return APPLIED

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> ProcessingResult:
        transaction_id = transaction.transaction_id

        if not self._log.is_disputed(transaction_id):
            return ProcessingResult.rejected(RejectionReason.NOT_DISPUTED)

        original = self._log.get_transaction(transaction_id)
        match original.transaction_type:
            case TransactionType.DEPOSIT:
                account.remove_held(original.amount)
            case TransactionType.WITHDRAWAL:
                account.release_hold(original.amount)
        account.locked = True

        self._log.unmark_disputed(transaction_id)
        self._log.remove_transaction(transaction_id)
        return APPLIED
