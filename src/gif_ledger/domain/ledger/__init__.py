"""
Ledger Bounded Context

Entries, per-voter vote records, and the rules that keep their tallies in step.
"""

from gif_ledger.domain.ledger.entities import Entry, LedgerState, VoteRecord
from gif_ledger.domain.ledger.entry_store import EntryStore
from gif_ledger.domain.ledger.repository import LedgerRepository
from gif_ledger.domain.ledger.snapshot import EntryListing, get_total_entries, list_entries
from gif_ledger.domain.ledger.value_objects import VoteDirection, VoteOutcome
from gif_ledger.domain.ledger.vote_ledger import VoteLedger

__all__ = [
    # Entities
    "Entry",
    "VoteRecord",
    "LedgerState",
    # Value Objects
    "VoteDirection",
    "VoteOutcome",
    # Repository
    "LedgerRepository",
    # Services
    "EntryStore",
    "VoteLedger",
    # Projections
    "EntryListing",
    "get_total_entries",
    "list_entries",
]
