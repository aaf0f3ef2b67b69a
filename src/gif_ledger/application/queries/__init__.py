"""
Application Queries (CQRS Read Side)

Query objects and handlers for read operations.
Queries do not modify state, only retrieve data.
"""

from gif_ledger.application.queries.get_ledger import (
    GetLedgerHandler,
    GetLedgerQuery,
    LedgerSnapshot,
)

__all__ = [
    "GetLedgerQuery",
    "GetLedgerHandler",
    "LedgerSnapshot",
]
