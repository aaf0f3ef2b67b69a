"""Core domain entities for the ledger bounded context."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gif_ledger.domain.ledger.value_objects import VoteDirection
from gif_ledger.domain.shared.datetime_utils import utcnow
from gif_ledger.domain.shared.exceptions import EntryNotFoundError
from gif_ledger.domain.shared.messages import ErrorMessages
from gif_ledger.domain.shared.types import (
    EntryIdInt,
    IdentityStr,
    LedgerIdStr,
    NonEmptyStr,
    NonNegativeInt,
    TallyInt,
    UtcDatetimeField,
)

VoteKey = tuple[int, str]


class Entry(BaseModel):
    """A submitted item with its cached vote tallies."""

    model_config = ConfigDict(frozen=True)

    id: EntryIdInt
    url: NonEmptyStr
    submitter: IdentityStr
    upvotes: TallyInt = 0
    downvotes: TallyInt = 0
    submitted_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def score(self) -> int:
        return self.upvotes - self.downvotes

    def adjust(self, direction: VoteDirection, delta: int) -> Entry:
        """Return a copy with the tally for ``direction`` moved by ``delta``."""
        field = direction.tally_field
        return self.model_copy(update={field: getattr(self, field) + delta})


class VoteRecord(BaseModel):
    """One voter's current choice on one entry."""

    model_config = ConfigDict(frozen=True)

    entry_id: EntryIdInt
    voter_id: IdentityStr
    direction: VoteDirection
    cast_at: UtcDatetimeField = Field(default_factory=utcnow)

    @property
    def key(self) -> VoteKey:
        return (self.entry_id, self.voter_id)


class LedgerState(BaseModel):
    """Aggregate holding every entry and vote record of one ledger.

    Instances are never mutated; transitions build a new state.
    """

    model_config = ConfigDict(frozen=True)

    ledger_id: LedgerIdStr
    # Bumped on every committed change; the stored copy carries the same number.
    version: NonNegativeInt = 0
    created_at: UtcDatetimeField = Field(default_factory=utcnow)
    entries: tuple[Entry, ...] = ()
    votes: dict[VoteKey, VoteRecord] = Field(default_factory=dict)

    @property
    def total_entries(self) -> int:
        return len(self.entries)

    @property
    def total_votes(self) -> int:
        return len(self.votes)

    @property
    def next_entry_id(self) -> int:
        return len(self.entries)

    def get_entry(self, entry_id: int) -> Entry:
        """Look up an entry by id.

        Raises:
            EntryNotFoundError: If the id is negative or past the end.
        """
        if entry_id < 0 or entry_id >= len(self.entries):
            raise EntryNotFoundError(entry_id)
        return self.entries[entry_id]

    def vote_of(self, entry_id: int, voter_id: str) -> VoteDirection | None:
        record = self.votes.get((entry_id, voter_id))
        return record.direction if record is not None else None

    def verify(self) -> None:
        """Check id sequencing and that tallies match the vote records.

        Raises:
            ValueError: If any invariant is broken.
        """
        counts: dict[VoteKey, int] = {}
        for (entry_id, _voter), record in self.votes.items():
            key = (entry_id, record.direction.value)
            counts[key] = counts.get(key, 0) + 1

        for position, entry in enumerate(self.entries):
            if entry.id != position:
                raise ValueError(
                    ErrorMessages.ENTRY_ID_MISMATCH.format(position=position, entry_id=entry.id)
                )
            up = counts.get((entry.id, VoteDirection.UP.value), 0)
            down = counts.get((entry.id, VoteDirection.DOWN.value), 0)
            if entry.upvotes != up or entry.downvotes != down:
                raise ValueError(ErrorMessages.VOTE_TALLY_MISMATCH.format(entry_id=entry.id))

        for entry_id, _voter in self.votes:
            if entry_id >= len(self.entries):
                raise ValueError(ErrorMessages.VOTE_TALLY_MISMATCH.format(entry_id=entry_id))
