"""Centralized message constants for error messages, validation, and log output."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Entry Validation Errors
    EMPTY_URL = "Entry URL cannot be empty"
    URL_TOO_LONG = "Entry URL exceeds maximum length of {max_length} characters"
    URL_NOT_HTTP = "Entry URL must start with http:// or https://"
    URL_INVALID_UNICODE = "Entry URL must be valid Unicode text"
    EMPTY_IDENTITY = "Identity cannot be empty"
    IDENTITY_TOO_LONG = "Identity exceeds maximum length of {max_length} characters"
    IDENTITY_INVALID_UNICODE = "Identity must be valid Unicode text"

    # Ledger State Errors
    VOTE_TALLY_MISMATCH = "Tally for entry {entry_id} does not match its vote records"
    ENTRY_ID_MISMATCH = "Entry at position {position} has id {entry_id}"

    # Time/Date Validation Errors
    TIMEZONE_REQUIRED_UTC_DATETIME = "UtcDateTime requires a timezone-aware datetime"

    # Configuration Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite:///"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Application Errors
    UNKNOWN_COMMAND = "Unknown command kind: {kind}"


class LogTemplates:
    """Log message templates for %-style logger calls."""

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"
    DATABASE_STATS_FAILED = "Failed to get database stats: %s"
    TABLE_MIGRATED = "Added column %s.%s"

    # Repository Operations
    LEDGER_SAVED = "Saved ledger %s (%d entries, %d votes)"
    LEDGER_LOADED = "Loaded ledger %s (%d entries, %d votes)"
    LEDGER_DELETED = "Deleted ledger %s"

    # Command Processing
    LEDGER_INITIALIZED = "Initialized ledger %s"
    LEDGER_RESUMED = "Resumed ledger %s with %d entries"
    ENTRY_ADDED = "Added entry %d to ledger %s (submitter=%s)"
    VOTE_APPLIED = "Vote %s on entry %d by %s in ledger %s: %s"
    COMMAND_REJECTED = "Rejected %s on ledger %s: %s"
    LEDGER_CONFLICT_RETRY = "Ledger %s changed underneath %s (attempt %d), reloading"

    # Application Lifecycle
    APP_STARTING = "Starting gif-ledger in %s mode"
    APP_FATAL_ERROR = "Fatal error: %s"
    LOGGING_CONFIG_FALLBACK = "Could not load %s, falling back to basic config"
    CONTAINER_SHUTDOWN = "Container shutdown complete"


class CliMessages:
    """User-facing command line output."""

    LEDGER_INITIALIZED = "Initialized ledger '{ledger_id}'"
    ENTRY_ADDED = "Added entry {entry_id}: {url}"
    VOTE_APPLIED = "Entry {entry_id}: {upvotes} up / {downvotes} down ({outcome})"
    TOTAL_ENTRIES = "Total entries: {total}"
    ENTRY_LINE = "  [{entry_id}] {url} by {submitter}  +{upvotes} -{downvotes} (score {score})"
    NO_ENTRIES = "  (no entries)"
    ERROR = "error [{code}]: {message}"
