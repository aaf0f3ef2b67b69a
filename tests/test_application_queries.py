"""
Unit Tests for Application Queries

Tests for:
- LedgerSnapshot projection
- GetLedgerHandler
"""

import pytest

from gif_ledger.application.queries import GetLedgerHandler, GetLedgerQuery, LedgerSnapshot
from gif_ledger.application.services.processor_registry import ProcessorRegistry
from gif_ledger.domain.ledger.entry_store import EntryStore
from gif_ledger.domain.ledger.vote_ledger import VoteLedger
from gif_ledger.domain.shared.exceptions import NotInitializedError


class TestLedgerSnapshot:
    """Tests for the read model built from a ledger state."""

    def test_from_empty_state(self, empty_ledger):
        snapshot = LedgerSnapshot.from_state(empty_ledger)

        assert snapshot.ledger_id == "test-ledger"
        assert snapshot.total_entries == 0
        assert snapshot.total_votes == 0
        assert snapshot.entries == []
        assert snapshot.is_empty is True

    def test_from_state_with_votes(self, ledger_with_entry):
        state, _ = VoteLedger.up_vote(ledger_with_entry, 0, "bob")

        snapshot = LedgerSnapshot.from_state(state)

        assert snapshot.total_entries == 1
        assert snapshot.total_votes == 1
        assert snapshot.entries[0].upvotes == 1
        assert snapshot.is_empty is False

    def test_json_dump(self, ledger_with_entry):
        payload = LedgerSnapshot.from_state(ledger_with_entry).model_dump(mode="json")

        assert payload["total_entries"] == 1
        assert payload["entries"][0]["url"] == "https://x/gif1"
        assert payload["entries"][0]["submitter"] == "alice"


class TestGetLedgerHandler:
    """Tests for the ledger query handler."""

    @pytest.fixture
    def registry(self):
        return ProcessorRegistry(entry_store=EntryStore())

    async def test_handle_returns_live_tallies(self, registry):
        processor = await registry.get("gifs")
        await processor.initialize()
        await processor.add_entry("https://x/gif1", "alice")
        await processor.add_entry("https://x/gif2", "alice")
        await processor.up_vote(1, "bob")

        handler = GetLedgerHandler(processors=registry)
        snapshot = await handler.handle(GetLedgerQuery(ledger_id="gifs"))

        assert snapshot.total_entries == 2
        assert [e.id for e in snapshot.entries] == [0, 1]
        assert snapshot.entries[1].upvotes == 1

    async def test_handle_uninitialized_ledger(self, registry):
        handler = GetLedgerHandler(processors=registry)

        with pytest.raises(NotInitializedError):
            await handler.handle(GetLedgerQuery(ledger_id="missing"))

    async def test_handle_reads_persisted_ledger(self, ledger_repository, ledger_with_entry):
        await ledger_repository.save(ledger_with_entry)
        registry = ProcessorRegistry(entry_store=EntryStore(), repository=ledger_repository)

        snapshot = await GetLedgerHandler(processors=registry).handle(
            GetLedgerQuery(ledger_id="test-ledger")
        )

        assert snapshot.total_entries == 1
        assert snapshot.entries[0].url == "https://x/gif1"
