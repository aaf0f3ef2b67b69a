"""
Command Processor

Applies ledger commands one at a time against an owned ledger state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

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
)
from gif_ledger.domain.ledger.entry_store import EntryStore
from gif_ledger.domain.ledger.vote_ledger import VoteLedger
from gif_ledger.domain.shared.exceptions import (
    AlreadyInitializedError,
    ConcurrencyError,
    DomainError,
    NotInitializedError,
)
from gif_ledger.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.ledger.entities import LedgerState
    from ...domain.ledger.repository import LedgerRepository

logger = logging.getLogger(__name__)

R = TypeVar("R")


class CommandProcessor:
    """Single-writer state machine for one ledger.

    Every command runs under one lock, so commands apply strictly in
    submission order. The new state is computed from the current one, saved
    to the repository (when one is attached), and only then swapped in. A
    failing command therefore leaves both the in-memory state and the stored
    state untouched.

    Other processes may write the same stored ledger. When a save finds the
    stored version ahead of ours, the state is reloaded and the command is
    applied again, up to ``MAX_COMMIT_ATTEMPTS`` times.

    Readers use :meth:`snapshot`, which returns the current immutable state
    without taking the lock.
    """

    MAX_COMMIT_ATTEMPTS = 5

    def __init__(
        self,
        ledger_id: str,
        *,
        entry_store: EntryStore | None = None,
        repository: LedgerRepository | None = None,
    ) -> None:
        self._ledger_id = ledger_id
        self._entry_store = entry_store or EntryStore()
        self._repository = repository
        self._state: LedgerState | None = None
        self._lock = asyncio.Lock()

    @property
    def ledger_id(self) -> str:
        return self._ledger_id

    @property
    def is_initialized(self) -> bool:
        return self._state is not None

    def snapshot(self) -> LedgerState:
        """Return the current point-in-time state.

        Raises:
            NotInitializedError: If the ledger has not been created or loaded.
        """
        state = self._state
        if state is None:
            raise NotInitializedError(self._ledger_id)
        return state

    async def load(self) -> bool:
        """Resume a previously stored ledger. Returns True if one was found."""
        if self._repository is None:
            return False

        async with self._lock:
            state = await self._repository.get(self._ledger_id)
            if state is None:
                return False
            self._state = state

        logger.info(LogTemplates.LEDGER_RESUMED, self._ledger_id, state.total_entries)
        return True

    async def handle(self, command: LedgerCommand) -> CommandResult:
        """Apply one command and return its acknowledgment.

        Raises:
            DomainError: One of the typed ledger errors; state is unchanged.
        """
        return await self._locked(command, lambda: self._apply(command))

    async def initialize(self) -> InitializeResult:
        return await self._locked(InitializeCommand(), self._initialize)

    async def add_entry(self, url: str, submitter: str) -> AddEntryResult:
        command = AddEntryCommand(url=url, submitter=submitter)
        return await self._locked(command, lambda: self._add_entry(command.url, command.submitter))

    async def up_vote(self, entry_id: int, voter: str) -> VoteResult:
        command = UpVoteCommand(entry_id=entry_id, voter=voter)
        return await self._locked(command, lambda: self._vote(command))

    async def down_vote(self, entry_id: int, voter: str) -> VoteResult:
        command = DownVoteCommand(entry_id=entry_id, voter=voter)
        return await self._locked(command, lambda: self._vote(command))

    async def _locked(self, command: LedgerCommand, step: Callable[[], Awaitable[R]]) -> R:
        async with self._lock:
            attempt = 1
            while True:
                try:
                    return await step()
                except ConcurrencyError as e:
                    if attempt >= self.MAX_COMMIT_ATTEMPTS:
                        logger.info(
                            LogTemplates.COMMAND_REJECTED, command.kind, self._ledger_id, e.code
                        )
                        raise
                    # The stored ledger moved on under another writer.
                    logger.warning(
                        LogTemplates.LEDGER_CONFLICT_RETRY, self._ledger_id, command.kind, attempt
                    )
                    await self._reload()
                    attempt += 1
                except DomainError as e:
                    logger.info(LogTemplates.COMMAND_REJECTED, command.kind, self._ledger_id, e.code)
                    raise

    async def _reload(self) -> None:
        if self._repository is not None:
            self._state = await self._repository.get(self._ledger_id)

    async def _apply(self, command: LedgerCommand) -> CommandResult:
        match command:
            case InitializeCommand():
                return await self._initialize()
            case AddEntryCommand(url=url, submitter=submitter):
                return await self._add_entry(url, submitter)
            case UpVoteCommand() | DownVoteCommand():
                return await self._vote(command)
            case _:
                raise TypeError(ErrorMessages.UNKNOWN_COMMAND.format(kind=type(command).__name__))

    async def _initialize(self) -> InitializeResult:
        if self._state is not None:
            raise AlreadyInitializedError(self._ledger_id)
        if self._repository is not None and await self._repository.exists(self._ledger_id):
            raise AlreadyInitializedError(self._ledger_id)

        await self._commit(EntryStore.create_ledger(self._ledger_id))
        logger.info(LogTemplates.LEDGER_INITIALIZED, self._ledger_id)
        return InitializeResult(ledger_id=self._ledger_id)

    async def _add_entry(self, url: str, submitter: str) -> AddEntryResult:
        state, entry_id = self._entry_store.append_entry(self.snapshot(), url, submitter)
        await self._commit(state)
        logger.info(LogTemplates.ENTRY_ADDED, entry_id, self._ledger_id, submitter)
        return AddEntryResult(ledger_id=self._ledger_id, entry_id=entry_id)

    async def _vote(self, command: UpVoteCommand | DownVoteCommand) -> VoteResult:
        state, outcome = VoteLedger.cast_vote(
            self.snapshot(), command.entry_id, command.voter, command.direction
        )
        if outcome.tallies_changed:
            await self._commit(state)

        entry = state.get_entry(command.entry_id)
        logger.info(
            LogTemplates.VOTE_APPLIED,
            command.direction.value,
            command.entry_id,
            command.voter,
            self._ledger_id,
            outcome.value,
        )
        return VoteResult(
            ledger_id=self._ledger_id,
            entry_id=command.entry_id,
            direction=command.direction,
            outcome=outcome,
            upvotes=entry.upvotes,
            downvotes=entry.downvotes,
        )

    async def _commit(self, state: LedgerState) -> None:
        state = state.model_copy(update={"version": state.version + 1})
        if self._repository is not None:
            await self._repository.save(state)
        self._state = state
