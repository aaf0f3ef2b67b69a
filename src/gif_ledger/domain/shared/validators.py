"""Plain validation helpers that raise typed domain errors.

Pydantic enforces the same limits on the entities; these run first so that
callers get an ``InvalidInputError`` instead of a raw ``ValidationError``.
"""

from __future__ import annotations

from gif_ledger.domain.shared.exceptions import InvalidInputError
from gif_ledger.domain.shared.messages import ErrorMessages
from gif_ledger.domain.shared.types import IDENTITY_MAX_LENGTH


def is_valid_unicode(value: str) -> bool:
    """Check that a string holds no lone surrogates."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_identity(value: str, field_name: str = "identity") -> str:
    """Validate an opaque caller identity.

    Raises:
        InvalidInputError: If the identity is empty, too long, or not valid text.
    """
    if not value:
        raise InvalidInputError(ErrorMessages.EMPTY_IDENTITY, field=field_name)
    if len(value) > IDENTITY_MAX_LENGTH:
        raise InvalidInputError(
            ErrorMessages.IDENTITY_TOO_LONG.format(max_length=IDENTITY_MAX_LENGTH),
            field=field_name,
        )
    if not is_valid_unicode(value):
        raise InvalidInputError(ErrorMessages.IDENTITY_INVALID_UNICODE, field=field_name)
    return value
