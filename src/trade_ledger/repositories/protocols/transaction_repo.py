"""Transaction repository protocol."""

from typing import Protocol

from trade_ledger.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for the append-only trade log."""

    def create(self, transaction: Transaction) -> Transaction:
        """Append a transaction."""
        ...

    def list_by_account(self, account_id: str) -> list[Transaction]:
        """List all transactions for an account, newest first."""
        ...
