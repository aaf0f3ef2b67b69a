"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class AlreadyInitializedError(DomainError):
    """Raised when Initialize is submitted for a ledger that already exists."""

    def __init__(self, ledger_id: str, message: str | None = None) -> None:
        msg = message or f"Ledger '{ledger_id}' is already initialized"
        super().__init__(msg, code="ALREADY_INITIALIZED")
        self.ledger_id = ledger_id


class NotInitializedError(DomainError):
    """Raised when a command other than Initialize arrives before the ledger exists."""

    def __init__(self, ledger_id: str, message: str | None = None) -> None:
        msg = message or f"Ledger '{ledger_id}' has not been initialized"
        super().__init__(msg, code="NOT_INITIALIZED")
        self.ledger_id = ledger_id


class InvalidInputError(DomainError):
    """Raised when a command payload fails domain validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="INVALID_INPUT")
        self.field = field


class EntryNotFoundError(DomainError):
    """Raised when an entry id does not reference an existing entry."""

    def __init__(self, entry_id: int, message: str | None = None) -> None:
        msg = message or f"Entry with id '{entry_id}' not found"
        super().__init__(msg, code="NOT_FOUND")
        self.entry_id = entry_id


class ConcurrencyError(DomainError):
    """Raised when a stored ledger was changed by another writer since it was loaded."""

    def __init__(self, ledger_id: str, version: int, message: str | None = None) -> None:
        msg = message or (
            f"Ledger '{ledger_id}' was modified concurrently (expected version {version})"
        )
        super().__init__(msg, code="CONCURRENCY_ERROR")
        self.ledger_id = ledger_id
        self.version = version
