"""
Application Layer

Contains the use cases: command handling and queries over ledgers.

Structure:
- commands/: CQRS write operations (InitializeCommand, AddEntryCommand, ...)
- queries/: CQRS read operations (GetLedgerQuery)
- services/: Processor registry shared by commands and queries
"""
