"""
Ledger Domain Value Objects

Immutable value objects for the ledger bounded context.
"""

from enum import Enum


class VoteDirection(Enum):
    """Direction of a single voter's choice on an entry."""

    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "VoteDirection":
        """Get the other direction."""
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP

    @property
    def tally_field(self) -> str:
        """Name of the Entry counter this direction feeds."""
        return {
            VoteDirection.UP: "upvotes",
            VoteDirection.DOWN: "downvotes",
        }[self]


class VoteOutcome(Enum):
    """What happened when a vote was cast.

    Every outcome leaves the tally invariant intact; only the first two
    change any counter.
    """

    RECORDED = "recorded"  # First vote by this voter on this entry
    CHANGED = "changed"  # Voter flipped direction
    UNCHANGED = "unchanged"  # Same direction as before, nothing to do

    @property
    def tallies_changed(self) -> bool:
        """Check if this outcome moved any tally."""
        return self in {VoteOutcome.RECORDED, VoteOutcome.CHANGED}

    def get_message(self, direction: VoteDirection) -> str:
        """Get a short human-readable description of this outcome."""
        messages = {
            VoteOutcome.RECORDED: f"{direction.value} vote recorded",
            VoteOutcome.CHANGED: f"vote changed to {direction.value}",
            VoteOutcome.UNCHANGED: f"already voted {direction.value}",
        }
        return messages[self]
