"""
Unit Tests for Domain Ledger Layer

Tests for:
- Value Objects: VoteDirection, VoteOutcome
- Entities: Entry, VoteRecord, LedgerState
- Services: EntryStore, VoteLedger
- Projections: get_total_entries, list_entries
"""

import random
from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from gif_ledger.domain.ledger.entities import Entry, LedgerState, VoteRecord
from gif_ledger.domain.ledger.entry_store import EntryStore
from gif_ledger.domain.ledger.snapshot import EntryListing, get_total_entries, list_entries
from gif_ledger.domain.ledger.value_objects import VoteDirection, VoteOutcome
from gif_ledger.domain.ledger.vote_ledger import VoteLedger
from gif_ledger.domain.shared.exceptions import EntryNotFoundError, InvalidInputError

# =============================================================================
# Value Object Tests
# =============================================================================


class TestVoteDirection:
    """Unit tests for VoteDirection enum."""

    def test_values(self):
        assert VoteDirection.UP.value == "up"
        assert VoteDirection.DOWN.value == "down"

    def test_opposite(self):
        assert VoteDirection.UP.opposite is VoteDirection.DOWN
        assert VoteDirection.DOWN.opposite is VoteDirection.UP

    def test_tally_field(self):
        assert VoteDirection.UP.tally_field == "upvotes"
        assert VoteDirection.DOWN.tally_field == "downvotes"


class TestVoteOutcome:
    """Unit tests for VoteOutcome enum."""

    def test_tallies_changed(self):
        assert VoteOutcome.RECORDED.tallies_changed is True
        assert VoteOutcome.CHANGED.tallies_changed is True
        assert VoteOutcome.UNCHANGED.tallies_changed is False

    def test_get_message(self):
        assert VoteOutcome.RECORDED.get_message(VoteDirection.UP) == "up vote recorded"
        assert VoteOutcome.CHANGED.get_message(VoteDirection.DOWN) == "vote changed to down"
        assert "already voted" in VoteOutcome.UNCHANGED.get_message(VoteDirection.UP)


# =============================================================================
# Entity Tests
# =============================================================================


class TestEntry:
    """Unit tests for Entry entity."""

    def test_defaults(self):
        entry = Entry(id=0, url="https://x/gif1", submitter="alice")
        assert entry.upvotes == 0
        assert entry.downvotes == 0
        assert entry.submitted_at.tzinfo is not None

    def test_score(self):
        entry = Entry(id=0, url="u", submitter="alice", upvotes=5, downvotes=2)
        assert entry.score == 3

    def test_is_frozen(self):
        entry = Entry(id=0, url="u", submitter="alice")
        with pytest.raises(ValidationError):
            entry.upvotes = 3  # type: ignore[misc]

    def test_negative_tally_rejected(self):
        with pytest.raises(ValidationError):
            Entry(id=0, url="u", submitter="alice", upvotes=-1)

    def test_negative_id_rejected(self):
        with pytest.raises(ValidationError):
            Entry(id=-1, url="u", submitter="alice")

    def test_naive_datetime_rejected(self):
        with pytest.raises(ValidationError):
            Entry(id=0, url="u", submitter="alice", submitted_at=datetime(2024, 1, 1))

    def test_submitted_at_normalised_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        entry = Entry(
            id=0, url="u", submitter="alice", submitted_at=datetime(2024, 1, 1, 12, tzinfo=plus_two)
        )
        assert entry.submitted_at == datetime(2024, 1, 1, 10, tzinfo=UTC)
        assert entry.submitted_at.utcoffset() == timedelta(0)

    def test_adjust_returns_copy(self):
        entry = Entry(id=0, url="u", submitter="alice")
        bumped = entry.adjust(VoteDirection.DOWN, +1)
        assert bumped.downvotes == 1
        assert entry.downvotes == 0


class TestVoteRecord:
    """Unit tests for VoteRecord entity."""

    def test_key(self):
        record = VoteRecord(entry_id=3, voter_id="bob", direction=VoteDirection.UP)
        assert record.key == (3, "bob")

    def test_empty_voter_rejected(self):
        with pytest.raises(ValidationError):
            VoteRecord(entry_id=0, voter_id="", direction=VoteDirection.UP)


class TestLedgerState:
    """Unit tests for LedgerState aggregate."""

    def test_empty_state(self, empty_ledger):
        assert empty_ledger.ledger_id == "test-ledger"
        assert empty_ledger.total_entries == 0
        assert empty_ledger.total_votes == 0
        assert empty_ledger.next_entry_id == 0

    def test_invalid_ledger_id_rejected(self):
        with pytest.raises(ValidationError):
            LedgerState(ledger_id="has spaces")

    def test_get_entry(self, ledger_with_entry):
        assert ledger_with_entry.get_entry(0).url == "https://x/gif1"

    @pytest.mark.parametrize("entry_id", [-1, 1, 99])
    def test_get_entry_out_of_range(self, ledger_with_entry, entry_id):
        with pytest.raises(EntryNotFoundError) as exc_info:
            ledger_with_entry.get_entry(entry_id)
        assert exc_info.value.entry_id == entry_id
        assert exc_info.value.code == "NOT_FOUND"

    def test_vote_of_absent(self, ledger_with_entry):
        assert ledger_with_entry.vote_of(0, "bob") is None

    def test_verify_passes_for_consistent_state(self, ledger_with_entry):
        state, _ = VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        state.verify()

    def test_verify_detects_tally_mismatch(self, ledger_with_entry):
        broken = ledger_with_entry.model_copy(
            update={"entries": (ledger_with_entry.entries[0].adjust(VoteDirection.UP, +1),)}
        )
        with pytest.raises(ValueError, match="does not match"):
            broken.verify()

    def test_verify_detects_id_gap(self):
        state = LedgerState(
            ledger_id="gap",
            entries=(Entry(id=1, url="u", submitter="alice"),),
        )
        with pytest.raises(ValueError, match="position 0"):
            state.verify()

    def test_verify_detects_orphan_vote(self, empty_ledger):
        record = VoteRecord(entry_id=0, voter_id="bob", direction=VoteDirection.UP)
        state = empty_ledger.model_copy(update={"votes": {record.key: record}})
        with pytest.raises(ValueError):
            state.verify()


# =============================================================================
# EntryStore Tests
# =============================================================================


class TestEntryStore:
    """Unit tests for EntryStore domain service."""

    def test_create_ledger_is_empty(self):
        state = EntryStore.create_ledger("fresh")
        assert state.entries == ()
        assert state.votes == {}

    def test_append_assigns_sequential_ids(self, empty_ledger, entry_store):
        state = empty_ledger
        ids = []
        for i in range(5):
            state, entry_id = entry_store.append_entry(state, f"https://x/gif{i}", "alice")
            ids.append(entry_id)

        assert ids == [0, 1, 2, 3, 4]
        assert [e.id for e in state.entries] == ids

    def test_append_does_not_mutate_input(self, empty_ledger, entry_store):
        new_state, _ = entry_store.append_entry(empty_ledger, "https://x/gif1", "alice")
        assert empty_ledger.total_entries == 0
        assert new_state.total_entries == 1

    def test_append_initial_tallies_zero(self, ledger_with_entry):
        entry = ledger_with_entry.entries[0]
        assert (entry.upvotes, entry.downvotes) == (0, 0)
        assert entry.submitter == "alice"

    def test_url_stored_verbatim(self, empty_ledger, entry_store):
        state, _ = entry_store.append_entry(empty_ledger, "  not-a-link  ", "alice")
        assert state.entries[0].url == "  not-a-link  "

    @pytest.mark.parametrize("url", ["", "   ", "\t\n"])
    def test_empty_url_rejected(self, empty_ledger, entry_store, url):
        with pytest.raises(InvalidInputError) as exc_info:
            entry_store.append_entry(empty_ledger, url, "alice")
        assert exc_info.value.field == "url"
        assert exc_info.value.code == "INVALID_INPUT"

    def test_too_long_url_rejected(self, empty_ledger):
        store = EntryStore(max_url_length=10)
        with pytest.raises(InvalidInputError, match="maximum length of 10"):
            store.append_entry(empty_ledger, "https://x/too-long", "alice")

    def test_require_http_url(self, empty_ledger):
        store = EntryStore(require_http_url=True)
        with pytest.raises(InvalidInputError, match="http"):
            store.append_entry(empty_ledger, "ftp://x/gif", "alice")

        state, entry_id = store.append_entry(empty_ledger, "http://x/gif", "alice")
        assert entry_id == 0

    def test_invalid_unicode_url_rejected(self, empty_ledger, entry_store):
        with pytest.raises(InvalidInputError) as exc_info:
            entry_store.append_entry(empty_ledger, "https://x/\ud800", "alice")
        assert exc_info.value.field == "url"

    def test_overlong_submitter_rejected(self, empty_ledger, entry_store):
        with pytest.raises(InvalidInputError, match="maximum length of 256") as exc_info:
            entry_store.append_entry(empty_ledger, "https://x/gif1", "a" * 257)
        assert exc_info.value.field == "submitter"

    def test_submitter_at_length_limit_accepted(self, empty_ledger, entry_store):
        state, _ = entry_store.append_entry(empty_ledger, "https://x/gif1", "a" * 256)
        assert len(state.entries[0].submitter) == 256

    def test_empty_submitter_rejected(self, empty_ledger, entry_store):
        with pytest.raises(InvalidInputError) as exc_info:
            entry_store.append_entry(empty_ledger, "https://x/gif1", "")
        assert exc_info.value.field == "submitter"


# =============================================================================
# VoteLedger Tests
# =============================================================================


class TestVoteLedger:
    """Unit tests for VoteLedger domain service."""

    def test_first_vote_recorded(self, ledger_with_entry):
        state, outcome = VoteLedger.up_vote(ledger_with_entry, 0, "bob")

        assert outcome is VoteOutcome.RECORDED
        assert state.entries[0].upvotes == 1
        assert state.entries[0].downvotes == 0
        assert state.vote_of(0, "bob") is VoteDirection.UP

    def test_repeat_vote_is_noop(self, ledger_with_entry):
        once, _ = VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        twice, outcome = VoteLedger.up_vote(once, 0, "bob")

        assert outcome is VoteOutcome.UNCHANGED
        assert twice.entries[0].upvotes == 1
        assert twice is once

    def test_flip_moves_vote(self, ledger_with_entry):
        up, _ = VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        down, outcome = VoteLedger.down_vote(up, 0, "bob")

        assert outcome is VoteOutcome.CHANGED
        assert down.entries[0].upvotes == up.entries[0].upvotes - 1
        assert down.entries[0].downvotes == up.entries[0].downvotes + 1
        assert down.total_votes == 1

    def test_voters_are_independent(self, ledger_with_entry):
        state, _ = VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        state, _ = VoteLedger.up_vote(state, 0, "carol")
        state, _ = VoteLedger.down_vote(state, 0, "dave")

        entry = state.entries[0]
        assert (entry.upvotes, entry.downvotes) == (2, 1)
        assert entry.score == 1

    def test_entries_are_independent(self, ledger_with_entry, entry_store):
        state, _ = entry_store.append_entry(ledger_with_entry, "https://x/gif2", "alice")
        state, _ = VoteLedger.up_vote(state, 1, "bob")

        assert state.entries[0].upvotes == 0
        assert state.entries[1].upvotes == 1

    def test_submitter_may_vote_on_own_entry(self, ledger_with_entry):
        state, outcome = VoteLedger.up_vote(ledger_with_entry, 0, "alice")
        assert outcome is VoteOutcome.RECORDED
        assert state.entries[0].upvotes == 1

    def test_unknown_entry_raises_not_found(self, empty_ledger):
        with pytest.raises(EntryNotFoundError):
            VoteLedger.up_vote(empty_ledger, 99, "bob")

    def test_negative_entry_raises_not_found(self, ledger_with_entry):
        with pytest.raises(EntryNotFoundError):
            VoteLedger.down_vote(ledger_with_entry, -1, "bob")

    def test_empty_voter_rejected(self, ledger_with_entry):
        with pytest.raises(InvalidInputError):
            VoteLedger.up_vote(ledger_with_entry, 0, "")

    def test_overlong_voter_rejected(self, ledger_with_entry):
        with pytest.raises(InvalidInputError) as exc_info:
            VoteLedger.up_vote(ledger_with_entry, 0, "b" * 257)
        assert exc_info.value.field == "voter_id"

    def test_invalid_unicode_voter_rejected(self, ledger_with_entry):
        with pytest.raises(InvalidInputError):
            VoteLedger.down_vote(ledger_with_entry, 0, "bob\udfff")

    def test_input_state_untouched(self, ledger_with_entry):
        VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        assert ledger_with_entry.entries[0].upvotes == 0
        assert ledger_with_entry.votes == {}


# =============================================================================
# Ledger Properties
# =============================================================================


class TestLedgerProperties:
    """Invariants over arbitrary command sequences."""

    @pytest.mark.parametrize("seed", range(10))
    def test_tally_invariant_holds_after_random_votes(self, empty_ledger, entry_store, seed):
        rng = random.Random(seed)
        state = empty_ledger
        for i in range(5):
            state, _ = entry_store.append_entry(state, f"https://x/{i}", "alice")

        voters = ["bob", "carol", "dave", "erin"]
        for _ in range(200):
            direction = rng.choice(list(VoteDirection))
            state, _ = VoteLedger.cast_vote(state, rng.randrange(5), rng.choice(voters), direction)
            state.verify()

        assert state.total_votes <= 5 * len(voters)
        for entry in state.entries:
            assert entry.upvotes + entry.downvotes <= len(voters)

    def test_idempotence_for_every_direction(self, ledger_with_entry):
        for direction in VoteDirection:
            once, _ = VoteLedger.cast_vote(ledger_with_entry, 0, "bob", direction)
            twice, _ = VoteLedger.cast_vote(once, 0, "bob", direction)
            assert once.entries[0] == twice.entries[0]


# =============================================================================
# Snapshot Projection Tests
# =============================================================================


class TestSnapshotProjection:
    """Unit tests for read-only projections."""

    def test_get_total_entries(self, ledger_with_entry, empty_ledger):
        assert get_total_entries(empty_ledger) == 0
        assert get_total_entries(ledger_with_entry) == 1

    def test_list_entries_is_restartable(self, ledger_with_entry):
        listing = list_entries(ledger_with_entry)
        assert isinstance(listing, EntryListing)
        assert list(listing) == list(listing)
        assert len(listing) == 1
        assert listing[0].id == 0

    def test_listing_pinned_to_its_state(self, ledger_with_entry):
        listing = list_entries(ledger_with_entry)
        VoteLedger.up_vote(ledger_with_entry, 0, "bob")
        assert listing[0].upvotes == 0

    def test_listing_supports_slicing(self, ledger_with_entry, entry_store):
        state, _ = entry_store.append_entry(ledger_with_entry, "https://x/gif2", "bob")
        listing = list_entries(state)
        assert [e.id for e in listing[1:]] == [1]
        assert "2 entries" in repr(listing)
