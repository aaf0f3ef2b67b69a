"""Read-only projections over a ledger state."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import overload

from gif_ledger.domain.ledger.entities import Entry, LedgerState


class EntryListing(Sequence[Entry]):
    """Restartable view over the entries of one state.

    Holds a reference to the state's entry tuple, so iterating it twice gives
    the same entries even if the ledger has moved on in the meantime.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: tuple[Entry, ...]) -> None:
        self._entries = entries

    @overload
    def __getitem__(self, index: int) -> Entry: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Entry]: ...

    def __getitem__(self, index: int | slice) -> Entry | Sequence[Entry]:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        yield from self._entries

    def __repr__(self) -> str:
        return f"EntryListing({len(self._entries)} entries)"


def get_total_entries(state: LedgerState) -> int:
    return state.total_entries


def list_entries(state: LedgerState) -> EntryListing:
    return EntryListing(state.entries)
