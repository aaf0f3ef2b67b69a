"""
Persistence Repositories

SQLite implementations of the domain repository interfaces.
"""

from gif_ledger.infrastructure.persistence.repositories.ledger_repository import (
    SQLiteLedgerRepository,
)

__all__ = [
    "SQLiteLedgerRepository",
]
