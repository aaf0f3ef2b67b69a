"""Infrastructure layer - external systems integration.

This layer contains implementations for:
- Persistence (aiosqlite database and SQLite repositories)
"""

from gif_ledger.infrastructure.persistence.database import Database
from gif_ledger.infrastructure.persistence.repositories import SQLiteLedgerRepository

__all__ = [
    "Database",
    "SQLiteLedgerRepository",
]
