"""
Shared Domain Kernel

Contains constrained types, messages and exceptions shared across the domain.
"""

from gif_ledger.domain.shared.exceptions import (
    AlreadyInitializedError,
    ConcurrencyError,
    DomainError,
    EntryNotFoundError,
    InvalidInputError,
    NotInitializedError,
)

__all__ = [
    "DomainError",
    "AlreadyInitializedError",
    "ConcurrencyError",
    "NotInitializedError",
    "InvalidInputError",
    "EntryNotFoundError",
]
