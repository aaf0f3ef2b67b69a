"""Keeps one command processor per ledger id."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from gif_ledger.application.commands.processor import CommandProcessor

if TYPE_CHECKING:
    from ...domain.ledger.entry_store import EntryStore
    from ...domain.ledger.repository import LedgerRepository


class ProcessorRegistry:
    """Hands out the single processor for each ledger.

    All writers of a ledger must share one processor for its lock to give
    single-writer ordering, so processors are created once, loaded from the
    repository on creation, and cached.
    """

    def __init__(
        self,
        *,
        entry_store: EntryStore,
        repository: LedgerRepository | None = None,
    ) -> None:
        self._entry_store = entry_store
        self._repository = repository
        self._processors: dict[str, CommandProcessor] = {}
        self._lock = asyncio.Lock()

    async def get(self, ledger_id: str) -> CommandProcessor:
        async with self._lock:
            processor = self._processors.get(ledger_id)
            if processor is None:
                processor = CommandProcessor(
                    ledger_id,
                    entry_store=self._entry_store,
                    repository=self._repository,
                )
                await processor.load()
                self._processors[ledger_id] = processor
            return processor

    def clear(self) -> None:
        self._processors.clear()

    def __len__(self) -> int:
        return len(self._processors)
