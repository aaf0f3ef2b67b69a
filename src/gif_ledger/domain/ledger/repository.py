"""
Ledger Domain Repository Interfaces

Abstract base classes defining the contracts for ledger persistence.
"""

from abc import ABC, abstractmethod

from gif_ledger.domain.ledger.entities import LedgerState


class LedgerRepository(ABC):
    """Abstract repository for ledger states.

    A ledger is stored as a whole: ``save`` replaces whatever was stored
    under the same ledger id in one transaction.
    """

    @abstractmethod
    async def exists(self, ledger_id: str) -> bool:
        """Check whether a ledger has been stored.

        Args:
            ledger_id: The ledger name.

        Returns:
            True if the ledger exists.
        """
        ...

    @abstractmethod
    async def get(self, ledger_id: str) -> LedgerState | None:
        """Load a ledger.

        Args:
            ledger_id: The ledger name.

        Returns:
            The stored state, or None if the ledger does not exist.
        """
        ...

    @abstractmethod
    async def save(self, state: LedgerState) -> None:
        """Persist a ledger state, replacing the version it was derived from.

        Args:
            state: The state to store. Its ``version`` must be exactly one
                more than the stored version, or the ledger must not exist yet.

        Raises:
            ConcurrencyError: If the stored ledger is at another version.
        """
        ...

    @abstractmethod
    async def delete(self, ledger_id: str) -> bool:
        """Delete a ledger with all its entries and votes.

        Args:
            ledger_id: The ledger name.

        Returns:
            True if a ledger was deleted.
        """
        ...

    @abstractmethod
    async def list_ledger_ids(self) -> list[str]:
        """List the names of every stored ledger, oldest first."""
        ...
