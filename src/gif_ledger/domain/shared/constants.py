"""Centralized constants for database schema and connection setup."""

from __future__ import annotations


class DatabaseTables:
    """Database table names."""

    LEDGERS = "ledgers"
    ENTRIES = "entries"
    VOTE_RECORDS = "vote_records"


class SQLPragmas:
    """SQLite PRAGMA statements applied to each connection."""

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
    PAGE_COUNT = "PRAGMA page_count"
    PAGE_SIZE = "PRAGMA page_size"
    TABLE_INFO = "PRAGMA table_info({table})"
