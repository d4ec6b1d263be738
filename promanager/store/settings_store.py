"""Per-league settings: remote mirror plus locally owned policy."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from ..normalize.policy import coerce_policy_patch
from ..schema.models import DEFAULT_POLICY, LocalPolicy, Settings
from ..schema.tables import settings as settings_table
from .engine import utcnow, write_guard

logger = logging.getLogger(__name__)


def _load_remote(raw: Optional[str]) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logger.error("settings: stored remote settings are not valid JSON")
        return {}
    return value if isinstance(value, dict) else {}


def _to_settings(row: Mapping[str, Any]) -> Settings:
    return Settings(
        league_id=int(row["league_id"]),
        remote=_load_remote(row["remote_settings_json"]),
        policy=LocalPolicy.from_row(row),
    )


class ConfigurationStore:
    """Settings rows keyed by league id.

    Remote settings are replaced wholesale on refresh; the local policy
    columns only change through ``update``. Writes touch only the columns
    they are given, so concurrent updates of different fields both apply.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _fetch(self, league_id: int) -> Optional[Mapping[str, Any]]:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(settings_table).where(settings_table.c.league_id == league_id)
            ).mappings().first()
        return row

    def exists(self, league_id: Any) -> bool:
        return self._fetch(int(league_id)) is not None

    def _insert(
        self,
        league_id: int,
        remote: Mapping[str, Any],
        policy: LocalPolicy,
    ) -> bool:
        """Insert a new row; ``False`` if another writer created it first."""
        now = utcnow()
        with write_guard("settings insert"):
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        insert(settings_table).values(
                            league_id=league_id,
                            remote_settings_json=json.dumps(dict(remote)),
                            created_at=now,
                            updated_at=now,
                            **policy.to_dict(),
                        )
                    )
            except IntegrityError:
                return False
        logger.info("settings: inserted league_id=%s", league_id)
        return True

    def get(
        self, league_id: Any, remote_settings: Optional[Mapping[str, Any]] = None
    ) -> Settings:
        league_id = int(league_id)
        row = self._fetch(league_id)
        if row is None:
            remote = dict(remote_settings or {})
            if self._insert(league_id, remote, DEFAULT_POLICY):
                return Settings(league_id=league_id, remote=remote, policy=DEFAULT_POLICY)
            row = self._fetch(league_id)

        if remote_settings:
            self.refresh_remote(league_id, remote_settings)
            return Settings(
                league_id=league_id,
                remote=dict(remote_settings),
                policy=LocalPolicy.from_row(row),
            )
        return _to_settings(row)

    def refresh_remote(self, league_id: Any, remote_settings: Mapping[str, Any]) -> None:
        league_id = int(league_id)
        with write_guard("settings remote refresh"), self.engine.begin() as conn:
            result = conn.execute(
                update(settings_table)
                .where(settings_table.c.league_id == league_id)
                .values(
                    remote_settings_json=json.dumps(dict(remote_settings)),
                    updated_at=utcnow(),
                )
            )
        if result.rowcount == 0:
            self._insert(league_id, remote_settings, DEFAULT_POLICY)
        logger.info("settings: refreshed remote settings league_id=%s", league_id)

    def update(self, league_id: Any, patch: Mapping[str, Any]) -> bool:
        """Apply a partial policy update.

        Returns ``False`` when every supplied field already held the given
        value, ``True`` otherwise.
        """
        league_id = int(league_id)
        values = coerce_policy_patch(patch)

        changed = or_(
            *(settings_table.c[name].is_distinct_from(value) for name, value in values.items())
        )
        with write_guard("settings update"), self.engine.begin() as conn:
            result = conn.execute(
                update(settings_table)
                .where(settings_table.c.league_id == league_id)
                .where(changed)
                .values(updated_at=utcnow(), **values)
            )
            if result.rowcount:
                logger.info(
                    "settings: updated league_id=%s fields=%s",
                    league_id,
                    ",".join(sorted(values)),
                )
                return True
            present = conn.execute(
                select(settings_table.c.league_id).where(
                    settings_table.c.league_id == league_id
                )
            ).first()
        if present is not None:
            return False

        if self._insert(league_id, {}, DEFAULT_POLICY.merged(values)):
            return True
        # Lost a creation race; apply the patch to the row that won.
        return self.update(league_id, values)

    def delete(self, league_id: Any) -> bool:
        with write_guard("settings delete"), self.engine.begin() as conn:
            result = conn.execute(
                delete(settings_table).where(settings_table.c.league_id == int(league_id))
            )
        logger.info("settings: deleted league_id=%s count=%s", league_id, result.rowcount)
        return result.rowcount > 0

    def all(self) -> dict[int, Settings]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(settings_table).order_by(settings_table.c.league_id)
            ).mappings().all()
        return {int(row["league_id"]): _to_settings(row) for row in rows}
