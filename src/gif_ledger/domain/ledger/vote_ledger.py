"""
Vote Ledger

Per-entry, per-voter vote state with change-of-mind semantics.
"""

from __future__ import annotations

from gif_ledger.domain.ledger.entities import LedgerState, VoteRecord
from gif_ledger.domain.ledger.value_objects import VoteDirection, VoteOutcome
from gif_ledger.domain.shared.validators import validate_identity


class VoteLedger:
    """Domain service for casting votes.

    A voter holds at most one vote per entry. Repeating the same vote is a
    no-op; voting the other way moves the vote from one tally to the other.
    """

    @classmethod
    def cast_vote(
        cls,
        state: LedgerState,
        entry_id: int,
        voter_id: str,
        direction: VoteDirection,
    ) -> tuple[LedgerState, VoteOutcome]:
        """Apply a vote and return the new state with what happened.

        Raises:
            EntryNotFoundError: If ``entry_id`` is out of range.
            InvalidInputError: If ``voter_id`` is empty, too long, or not valid text.
        """
        entry = state.get_entry(entry_id)
        validate_identity(voter_id, "voter_id")

        previous = state.vote_of(entry_id, voter_id)
        if previous is direction:
            return state, VoteOutcome.UNCHANGED

        if previous is None:
            updated = entry.adjust(direction, +1)
            outcome = VoteOutcome.RECORDED
        else:
            updated = entry.adjust(previous, -1).adjust(direction, +1)
            outcome = VoteOutcome.CHANGED

        record = VoteRecord(entry_id=entry_id, voter_id=voter_id, direction=direction)
        entries = list(state.entries)
        entries[entry_id] = updated
        votes = dict(state.votes)
        votes[record.key] = record

        new_state = state.model_copy(update={"entries": tuple(entries), "votes": votes})
        return new_state, outcome

    @classmethod
    def up_vote(cls, state: LedgerState, entry_id: int, voter_id: str) -> tuple[LedgerState, VoteOutcome]:
        return cls.cast_vote(state, entry_id, voter_id, VoteDirection.UP)

    @classmethod
    def down_vote(
        cls, state: LedgerState, entry_id: int, voter_id: str
    ) -> tuple[LedgerState, VoteOutcome]:
        return cls.cast_vote(state, entry_id, voter_id, VoteDirection.DOWN)
