from dataclasses import dataclass
from decimal import Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow, ROUND_HALF_EVEN
from enum import Enum
from typing import Optional


# Balance arithmetic is exact: anything that would need rounding raises Inexact.
LEDGER_CONTEXT = Context(
    prec=50,
    rounding=ROUND_HALF_EVEN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class RejectionReason(Enum):
    DUPLICATE_TRANSACTION = "duplicate_transaction"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    CLIENT_MISMATCH = "client_mismatch"
    ALREADY_DISPUTED = "already_disputed"
    NOT_DISPUTED = "not_disputed"
    NOT_DISPUTABLE = "not_disputable"
    PRECISION_EXCEEDED = "precision_exceeded"


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one transaction: applied when reason is None, rejected otherwise."""

    reason: Optional[RejectionReason] = None

    @property
    def applied(self) -> bool:
        return self.reason is None

    @classmethod
    def rejected(cls, reason: RejectionReason) -> "ProcessingResult":
        return cls(reason=reason)


APPLIED = ProcessingResult()


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return LEDGER_CONTEXT.add(self.available, self.held)

    def credit(self, amount: Decimal) -> None:
        self._move(amount, Decimal("0"))

    def debit(self, amount: Decimal) -> None:
        self._move(LEDGER_CONTEXT.minus(amount), Decimal("0"))

    def hold(self, amount: Decimal) -> None:
        self._move(LEDGER_CONTEXT.minus(amount), amount)

    def release_hold(self, amount: Decimal) -> None:
        self._move(amount, LEDGER_CONTEXT.minus(amount))

    def add_held(self, amount: Decimal) -> None:
        self._move(Decimal("0"), amount)

    def remove_held(self, amount: Decimal) -> None:
        self._move(Decimal("0"), LEDGER_CONTEXT.minus(amount))

    def _move(self, available_delta: Decimal, held_delta: Decimal) -> None:
        """Apply both deltas, or raise Inexact and leave the account untouched."""
        available = LEDGER_CONTEXT.add(self.available, available_delta)
        held = LEDGER_CONTEXT.add(self.held, held_delta)
        LEDGER_CONTEXT.add(available, held)
        self.available = available
        self.held = held


class ProcessingStats:
    """Counters for the end-of-run processing report."""

    def __init__(self):
        self.applied = 0
        self.rejected = 0
        self.invalid = 0

    def record_result(self, result: ProcessingResult) -> None:
        if result.applied:
            self.applied += 1
        else:
            self.rejected += 1

    def record_invalid(self) -> None:
        self.invalid += 1
