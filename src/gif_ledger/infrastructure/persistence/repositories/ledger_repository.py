"""SQLite implementation of the ledger repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gif_ledger.domain.ledger.entities import Entry, LedgerState, VoteRecord
from gif_ledger.domain.ledger.repository import LedgerRepository
from gif_ledger.domain.ledger.value_objects import VoteDirection
from gif_ledger.domain.shared.datetime_utils import UtcDateTime
from gif_ledger.domain.shared.exceptions import ConcurrencyError
from gif_ledger.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteLedgerRepository(LedgerRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def exists(self, ledger_id: str) -> bool:
        row = await self._db.fetch_one(
            "SELECT 1 AS found FROM ledgers WHERE ledger_id = ?",
            (ledger_id,),
        )
        return row is not None

    async def get(self, ledger_id: str) -> LedgerState | None:
        row = await self._db.fetch_one(
            "SELECT * FROM ledgers WHERE ledger_id = ?",
            (ledger_id,),
        )
        if row is None:
            return None

        entry_rows = await self._db.fetch_all(
            "SELECT * FROM entries WHERE ledger_id = ? ORDER BY entry_id",
            (ledger_id,),
        )
        vote_rows = await self._db.fetch_all(
            "SELECT * FROM vote_records WHERE ledger_id = ?",
            (ledger_id,),
        )

        entries = tuple(
            Entry(
                id=er["entry_id"],
                url=er["url"],
                submitter=er["submitter"],
                upvotes=er["upvotes"],
                downvotes=er["downvotes"],
                submitted_at=UtcDateTime.from_iso(er["submitted_at"]).dt,
            )
            for er in entry_rows
        )
        records = (
            VoteRecord(
                entry_id=vr["entry_id"],
                voter_id=vr["voter_id"],
                direction=VoteDirection(vr["direction"]),
                cast_at=UtcDateTime.from_iso(vr["cast_at"]).dt,
            )
            for vr in vote_rows
        )

        state = LedgerState(
            ledger_id=ledger_id,
            version=row["version"],
            created_at=UtcDateTime.from_iso(row["created_at"]).dt,
            entries=entries,
            votes={record.key: record for record in records},
        )
        state.verify()

        logger.debug(LogTemplates.LEDGER_LOADED, ledger_id, state.total_entries, state.total_votes)
        return state

    async def save(self, state: LedgerState) -> None:
        now = UtcDateTime.now().iso

        # The ledger row is only moved forward from the version this state was
        # derived from. Once that holds, entries are append-only and vote
        # records are only ever flipped, so upserting every row reproduces the
        # state exactly.
        async with self._db.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO ledgers (ledger_id, version, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(ledger_id) DO UPDATE SET
                    version = excluded.version,
                    updated_at = excluded.updated_at
                WHERE ledgers.version = excluded.version - 1
                """,
                (state.ledger_id, state.version, UtcDateTime(state.created_at).iso, now),
            )
            if cursor.rowcount == 0:
                raise ConcurrencyError(state.ledger_id, state.version - 1)

            await conn.executemany(
                """
                INSERT INTO entries
                    (ledger_id, entry_id, url, submitter, upvotes, downvotes, submitted_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(ledger_id, entry_id) DO UPDATE SET
                    upvotes = excluded.upvotes,
                    downvotes = excluded.downvotes
                """,
                [
                    (
                        state.ledger_id,
                        entry.id,
                        entry.url,
                        entry.submitter,
                        entry.upvotes,
                        entry.downvotes,
                        UtcDateTime(entry.submitted_at).iso,
                    )
                    for entry in state.entries
                ],
            )
            await conn.executemany(
                """
                INSERT INTO vote_records (ledger_id, entry_id, voter_id, direction, cast_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(ledger_id, entry_id, voter_id) DO UPDATE SET
                    direction = excluded.direction,
                    cast_at = excluded.cast_at
                """,
                [
                    (
                        state.ledger_id,
                        record.entry_id,
                        record.voter_id,
                        record.direction.value,
                        UtcDateTime(record.cast_at).iso,
                    )
                    for record in state.votes.values()
                ],
            )

        logger.debug(LogTemplates.LEDGER_SAVED, state.ledger_id, state.total_entries, state.total_votes)

    async def delete(self, ledger_id: str) -> bool:
        if not await self.exists(ledger_id):
            return False

        async with self._db.transaction() as conn:
            await conn.execute("DELETE FROM vote_records WHERE ledger_id = ?", (ledger_id,))
            await conn.execute("DELETE FROM entries WHERE ledger_id = ?", (ledger_id,))
            await conn.execute("DELETE FROM ledgers WHERE ledger_id = ?", (ledger_id,))

        logger.debug(LogTemplates.LEDGER_DELETED, ledger_id)
        return True

    async def list_ledger_ids(self) -> list[str]:
        rows = await self._db.fetch_all("SELECT ledger_id FROM ledgers ORDER BY created_at, ledger_id")
        return [r["ledger_id"] for r in rows]
