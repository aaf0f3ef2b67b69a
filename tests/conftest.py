import pytest
import pytest_asyncio

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from gif_ledger.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def ledger_repository(in_memory_database):
    """Create a ledger repository with in-memory database."""
    from gif_ledger.infrastructure.persistence.repositories.ledger_repository import (
        SQLiteLedgerRepository,
    )

    return SQLiteLedgerRepository(in_memory_database)


# ============================================================================
# Domain Fixtures
# ============================================================================


@pytest.fixture
def empty_ledger():
    """Create an empty ledger state."""
    from gif_ledger.domain.ledger.entry_store import EntryStore

    return EntryStore.create_ledger("test-ledger")


@pytest.fixture
def entry_store():
    from gif_ledger.domain.ledger.entry_store import EntryStore

    return EntryStore()


@pytest.fixture
def ledger_with_entry(empty_ledger, entry_store):
    """A ledger holding one entry (id 0) submitted by alice."""
    state, _ = entry_store.append_entry(empty_ledger, "https://x/gif1", "alice")
    return state


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def processor():
    """An initialized in-memory command processor."""
    from gif_ledger.application.commands.processor import CommandProcessor

    proc = CommandProcessor("test-ledger")
    await proc.initialize()
    return proc


@pytest_asyncio.fixture
async def persistent_processor(ledger_repository):
    """An uninitialized command processor backed by the SQLite repository."""
    from gif_ledger.application.commands.processor import CommandProcessor

    return CommandProcessor("persisted", repository=ledger_repository)
