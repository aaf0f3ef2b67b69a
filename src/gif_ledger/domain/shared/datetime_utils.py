"""Date/time helpers.

All timestamps are timezone-aware UTC datetimes. Persistence stores them as
ISO 8601 strings with an explicit offset.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from gif_ledger.domain.shared.messages import ErrorMessages


@dataclass(frozen=True, slots=True)
class UtcDateTime:
    """A tiny value-object wrapper around a timezone-aware UTC `datetime`."""

    dt: datetime

    def __post_init__(self) -> None:
        if self.dt.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        object.__setattr__(self, "dt", self.dt.astimezone(UTC))

    @classmethod
    def now(cls) -> UtcDateTime:
        return cls(datetime.now(UTC))

    @classmethod
    def from_iso(cls, value: str) -> UtcDateTime:
        # Accepts: '...+00:00' or '...Z'
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return cls(datetime.fromisoformat(value))

    @property
    def iso(self) -> str:
        """RFC3339/ISO8601 with explicit offset (+00:00)."""
        return self.dt.isoformat()


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)
