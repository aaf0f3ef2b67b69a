"""Query for reading a ledger's entries and tallies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from gif_ledger.domain.ledger.entities import Entry, LedgerState
from gif_ledger.domain.ledger.snapshot import get_total_entries, list_entries
from gif_ledger.domain.shared.types import LedgerIdStr, NonNegativeInt

if TYPE_CHECKING:
    from ..services.processor_registry import ProcessorRegistry


class GetLedgerQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    ledger_id: LedgerIdStr


class LedgerSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    ledger_id: LedgerIdStr
    total_entries: NonNegativeInt
    total_votes: NonNegativeInt = 0
    entries: list[Entry] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.total_entries == 0

    @classmethod
    def from_state(cls, state: LedgerState) -> LedgerSnapshot:
        return cls(
            ledger_id=state.ledger_id,
            total_entries=get_total_entries(state),
            total_votes=state.total_votes,
            entries=list(list_entries(state)),
        )


class GetLedgerHandler:

    def __init__(self, *, processors: ProcessorRegistry) -> None:
        self._processors = processors

    async def handle(self, query: GetLedgerQuery) -> LedgerSnapshot:
        processor = await self._processors.get(query.ledger_id)
        return LedgerSnapshot.from_state(processor.snapshot())
