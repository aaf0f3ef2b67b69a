"""
Entry Store

Creates ledgers and appends entries. Holds the URL acceptance rules.
"""

from __future__ import annotations

from gif_ledger.domain.ledger.entities import Entry, LedgerState
from gif_ledger.domain.shared.exceptions import InvalidInputError
from gif_ledger.domain.shared.messages import ErrorMessages
from gif_ledger.domain.shared.validators import is_valid_unicode, validate_identity


class EntryStore:
    """Domain service owning the ordered entry collection.

    The URL is an opaque payload: it is stored exactly as submitted. Only
    emptiness, length and (optionally) the http scheme are checked.
    """

    DEFAULT_MAX_URL_LENGTH = 2048
    HTTP_PREFIXES = ("http://", "https://")

    def __init__(
        self,
        max_url_length: int = DEFAULT_MAX_URL_LENGTH,
        require_http_url: bool = False,
    ) -> None:
        self.max_url_length = max_url_length
        self.require_http_url = require_http_url

    @staticmethod
    def create_ledger(ledger_id: str) -> LedgerState:
        """Return an empty ledger with no entries and no votes."""
        return LedgerState(ledger_id=ledger_id)

    def validate_url(self, url: str) -> None:
        """Check a submitted URL against the acceptance rules.

        Raises:
            InvalidInputError: If the URL is empty, too long, not valid text,
                or (when required) not an http(s) link.
        """
        if not url or not url.strip():
            raise InvalidInputError(ErrorMessages.EMPTY_URL, field="url")
        if len(url) > self.max_url_length:
            raise InvalidInputError(
                ErrorMessages.URL_TOO_LONG.format(max_length=self.max_url_length), field="url"
            )
        if self.require_http_url and not url.startswith(self.HTTP_PREFIXES):
            raise InvalidInputError(ErrorMessages.URL_NOT_HTTP, field="url")
        if not is_valid_unicode(url):
            raise InvalidInputError(ErrorMessages.URL_INVALID_UNICODE, field="url")

    def append_entry(self, state: LedgerState, url: str, submitter: str) -> tuple[LedgerState, int]:
        """Append a new entry and return the new state with its id.

        The id is the current entry count, so ids run 0, 1, 2, ... with no
        gaps or reuse.
        """
        self.validate_url(url)
        validate_identity(submitter, "submitter")

        entry_id = state.next_entry_id
        entry = Entry(id=entry_id, url=url, submitter=submitter)
        new_state = state.model_copy(update={"entries": (*state.entries, entry)})
        return new_state, entry_id
