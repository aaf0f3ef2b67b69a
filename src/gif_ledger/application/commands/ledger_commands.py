"""
Ledger Commands

The closed set of state-changing commands and their acknowledgments.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from gif_ledger.domain.ledger.value_objects import VoteDirection, VoteOutcome
from gif_ledger.domain.shared.types import IdentityStr, TallyInt


class InitializeCommand(BaseModel):
    """Command to create the empty ledger."""

    model_config = ConfigDict(frozen=True, strict=True)

    kind: Literal["initialize"] = "initialize"


class AddEntryCommand(BaseModel):
    """Command to append a new entry."""

    model_config = ConfigDict(frozen=True, strict=True)

    kind: Literal["add_entry"] = "add_entry"
    # Emptiness is a domain rule (InvalidInputError), not a payload error.
    url: str
    submitter: IdentityStr


class UpVoteCommand(BaseModel):
    """Command to cast or switch to an up vote."""

    model_config = ConfigDict(frozen=True, strict=True)

    kind: Literal["up_vote"] = "up_vote"
    entry_id: int
    voter: IdentityStr

    @property
    def direction(self) -> VoteDirection:
        return VoteDirection.UP


class DownVoteCommand(BaseModel):
    """Command to cast or switch to a down vote."""

    model_config = ConfigDict(frozen=True, strict=True)

    kind: Literal["down_vote"] = "down_vote"
    entry_id: int
    voter: IdentityStr

    @property
    def direction(self) -> VoteDirection:
        return VoteDirection.DOWN


LedgerCommand = Annotated[
    InitializeCommand | AddEntryCommand | UpVoteCommand | DownVoteCommand,
    Field(discriminator="kind"),
]

_command_adapter: TypeAdapter[LedgerCommand] = TypeAdapter(LedgerCommand)


def parse_command(payload: dict[str, Any]) -> LedgerCommand:
    """Build a command from an already-decoded mapping, e.g. a JSON body.

    Raises:
        pydantic.ValidationError: If ``kind`` is unknown or fields are malformed.
    """
    return _command_adapter.validate_python(payload)


class InitializeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ledger_id: str


class AddEntryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ledger_id: str
    entry_id: int


class VoteResult(BaseModel):
    """Acknowledgment of an UpVote or DownVote with the entry's live tallies."""

    model_config = ConfigDict(frozen=True)

    ledger_id: str
    entry_id: int
    direction: VoteDirection
    outcome: VoteOutcome
    upvotes: TallyInt
    downvotes: TallyInt

    @property
    def message(self) -> str:
        return self.outcome.get_message(self.direction)


CommandResult = InitializeResult | AddEntryResult | VoteResult
