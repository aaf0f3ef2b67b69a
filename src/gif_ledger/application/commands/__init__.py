"""
Application Commands (CQRS Write Side)

Command objects, their acknowledgments, and the processor that applies them.
Commands represent intent to change the ledger.
"""

from gif_ledger.application.commands.ledger_commands import (
    AddEntryCommand,
    AddEntryResult,
    CommandResult,
    DownVoteCommand,
    InitializeCommand,
    InitializeResult,
    LedgerCommand,
    UpVoteCommand,
    VoteResult,
    parse_command,
)
from gif_ledger.application.commands.processor import CommandProcessor

__all__ = [
    # Commands
    "InitializeCommand",
    "AddEntryCommand",
    "UpVoteCommand",
    "DownVoteCommand",
    "LedgerCommand",
    "parse_command",
    # Results
    "InitializeResult",
    "AddEntryResult",
    "VoteResult",
    "CommandResult",
    # Processor
    "CommandProcessor",
]
