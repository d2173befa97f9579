from dataclasses import replace
from typing import Dict, List

from models import ClientAccount


class LedgerStore:
    """
    In-memory client balance records keyed by client id.
    Records are handed out as copies; callers write changes back with put_account.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Return a copy of the client's account, creating a zero-balance one on first reference."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return replace(self._accounts[client_id])

    def put_account(self, account: ClientAccount) -> None:
        """Insert or replace the account stored under its client id."""
        self._accounts[account.client_id] = replace(account)

    def snapshot(self) -> List[ClientAccount]:
        """Return copies of all accounts, ordered by client id (for final output)."""
        return [replace(self._accounts[client_id]) for client_id in sorted(self._accounts)]

    def __len__(self) -> int:
        return len(self._accounts)
