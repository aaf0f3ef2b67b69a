"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the ledger is defined here once,
so models can simply annotate their fields::

    from gif_ledger.domain.shared.types import EntryIdInt, IdentityStr

    class MyModel(BaseModel):
        entry_id: EntryIdInt
        voter: IdentityStr
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

EntryIdInt = Annotated[int, Field(ge=0)]
"""Zero-based entry sequence number."""

TallyInt = Annotated[int, Field(ge=0)]
"""Vote tally: never negative."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

IDENTITY_MAX_LENGTH = 256

IdentityStr = Annotated[str, Field(min_length=1, max_length=IDENTITY_MAX_LENGTH)]
"""Opaque caller identity (wallet address, user name, ...)."""

LedgerIdStr = Annotated[str, Field(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.-]+$")]
"""Ledger name: letters, digits, dot, dash and underscore."""


# ── Settings-specific constraints ──────────────────────────────────

BusyTimeoutMs = Annotated[int, Field(ge=1000, le=30000)]
"""Database busy timeout in milliseconds: 1 000 … 30 000."""

ConnectionTimeoutS = Annotated[int, Field(ge=1, le=60)]
"""Database connection timeout in seconds: 1 … 60."""

MaxUrlLength = Annotated[int, Field(ge=1, le=65536)]
"""Maximum accepted entry URL length: 1 … 65 536."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    return v.astimezone(UTC)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""
