"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the database, repository, processors and
query handler. Components are created on demand and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.commands.processor import CommandProcessor
    from ..application.queries.get_ledger import GetLedgerHandler
    from ..application.services.processor_registry import ProcessorRegistry
    from ..domain.ledger.entry_store import EntryStore
    from ..domain.ledger.repository import LedgerRepository
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _ledger_repository: LedgerRepository | None = None

    # Domain services
    _entry_store: EntryStore | None = None

    # Application services
    _processor_registry: ProcessorRegistry | None = None

    # Query handlers
    _get_ledger_handler: GetLedgerHandler | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def ledger_repository(self) -> LedgerRepository:
        """Get the ledger repository."""
        if self._ledger_repository is None:
            from ..infrastructure.persistence.repositories.ledger_repository import (
                SQLiteLedgerRepository,
            )

            self._ledger_repository = SQLiteLedgerRepository(self.database)
        return self._ledger_repository

    # === Domain Services ===

    @property
    def entry_store(self) -> EntryStore:
        """Get the entry store configured with the ledger URL rules."""
        if self._entry_store is None:
            from ..domain.ledger.entry_store import EntryStore

            self._entry_store = EntryStore(
                max_url_length=self.settings.ledger.max_url_length,
                require_http_url=self.settings.ledger.require_http_url,
            )
        return self._entry_store

    # === Application Services ===

    @property
    def processor_registry(self) -> ProcessorRegistry:
        """Get the per-ledger processor registry."""
        if self._processor_registry is None:
            from ..application.services.processor_registry import ProcessorRegistry

            self._processor_registry = ProcessorRegistry(
                entry_store=self.entry_store,
                repository=self.ledger_repository,
            )
        return self._processor_registry

    async def processor(self, ledger_id: str | None = None) -> CommandProcessor:
        """Get the command processor for a ledger (default ledger if omitted)."""
        return await self.processor_registry.get(ledger_id or self.settings.ledger.default_ledger_id)

    # === Query Handlers ===

    @property
    def get_ledger_handler(self) -> GetLedgerHandler:
        """Get the ledger snapshot query handler."""
        if self._get_ledger_handler is None:
            from ..application.queries.get_ledger import GetLedgerHandler

            self._get_ledger_handler = GetLedgerHandler(processors=self.processor_registry)
        return self._get_ledger_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._processor_registry is not None:
            self._processor_registry.clear()

        if self._database is not None:
            await self._database.close()

        logger.info(LogTemplates.CONTAINER_SHUTDOWN)


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
