"""Append-only ledger of executed clauses and weekly quota counters."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Engine

from ..schema.models import ClauseRecord
from ..schema.tables import clauses
from ..weeks import day_bounds
from .engine import normalize_row, to_storage_datetime, write_guard

logger = logging.getLogger(__name__)

_ORDER = (clauses.c.occurred_at, clauses.c.id)


def _to_record(row: Mapping[str, Any]) -> ClauseRecord:
    return ClauseRecord(
        id=int(row["id"]),
        from_user_id=row["from_user_id"],
        from_user_name=row["from_user_name"],
        to_user_id=row["to_user_id"],
        to_user_name=row["to_user_name"],
        player_id=int(row["player_id"]),
        player_name=row["player_name"],
        amount=int(row["amount"]),
        occurred_at=row["occurred_at"],
        week_key=int(row["week_key"]),
    )


class ClauseLedger:
    """Clause records: inserted once, never updated.

    The ledger does not enforce quotas; it only counts. Deletion exists for
    administrative cleanup by id.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def append(self, record: ClauseRecord) -> int:
        row = dict(normalize_row(record))
        row.pop("id", None)
        row["occurred_at"] = to_storage_datetime(row["occurred_at"])
        with write_guard("clause append"), self.engine.begin() as conn:
            result = conn.execute(insert(clauses).values(**row))
            record_id = int(result.inserted_primary_key[0])
        logger.info(
            "clauses: appended id=%s player_id=%s week_key=%s",
            record_id,
            record.player_id,
            record.week_key,
        )
        return record_id

    def _count(self, column, user_id: Any, week: int) -> int:
        with self.engine.connect() as conn:
            count = conn.execute(
                select(func.count())
                .select_from(clauses)
                .where(column == int(user_id))
                .where(clauses.c.week_key == int(week))
            ).scalar_one()
        return int(count)

    def count_outgoing(self, user_id: Any, week: int) -> int:
        return self._count(clauses.c.from_user_id, user_id, week)

    def count_incoming(self, user_id: Any, week: int) -> int:
        return self._count(clauses.c.to_user_id, user_id, week)

    def _select(self, *criteria) -> list[ClauseRecord]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(clauses).where(*criteria).order_by(*_ORDER)
            ).mappings().all()
        return [_to_record(row) for row in rows]

    def all(self) -> list[ClauseRecord]:
        return self._select()

    def by_user(self, user_id: Any) -> list[ClauseRecord]:
        return self._select(clauses.c.from_user_id == int(user_id))

    def by_week(self, week: int) -> list[ClauseRecord]:
        return self._select(clauses.c.week_key == int(week))

    def by_date(self, day: Any) -> list[ClauseRecord]:
        start, end = day_bounds(day)
        return self._select(clauses.c.occurred_at.between(start, end))

    def exists_same_day(
        self, from_user_id: Any, to_user_id: Any, player_id: Any, day: Any
    ) -> bool:
        start, end = day_bounds(day)
        return bool(
            self._select(
                clauses.c.from_user_id == int(from_user_id),
                clauses.c.to_user_id == int(to_user_id),
                clauses.c.player_id == int(player_id),
                clauses.c.occurred_at.between(start, end),
            )
        )

    def delete(self, record_id: int) -> bool:
        with write_guard("clause delete"), self.engine.begin() as conn:
            result = conn.execute(delete(clauses).where(clauses.c.id == int(record_id)))
        logger.info("clauses: deleted id=%s count=%s", record_id, result.rowcount)
        return result.rowcount > 0
