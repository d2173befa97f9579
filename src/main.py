import csv
import logging
import sys
from decimal import Decimal
from typing import Iterable, TextIO

from models import LEDGER_CONTEXT, ClientAccount
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal exactly, without exponent or trailing zeros."""
    normalized = value.normalize(LEDGER_CONTEXT)
    return f"{normalized:f}"


def write_accounts(accounts: Iterable[ClientAccount], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for account in accounts:
        writer.writerow([
            account.client_id,
            format_decimal(account.available),
            format_decimal(account.held),
            format_decimal(account.total),
            str(account.locked).lower(),
        ])


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: payments-engine <transactions.csv>", file=sys.stderr)
        return 1

    filepath = args[0]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Cannot read {filepath}: {e}")
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
