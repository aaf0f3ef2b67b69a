# ruff: noqa: N999
"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting types, messages and exceptions
- ledger/: Entries, vote records and the voting rules
"""

from gif_ledger.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
