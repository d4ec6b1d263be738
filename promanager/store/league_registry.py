"""Local cache of remote leagues, each paired with its settings."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from ..normalize.league import normalize_league, remote_settings_of
from ..schema.models import League, Settings
from ..schema.tables import leagues
from .engine import utcnow, write_guard
from .settings_store import ConfigurationStore

logger = logging.getLogger(__name__)

_ATTRIBUTE_COLUMNS = tuple(
    column.name
    for column in leagues.columns
    if column.name not in ("league_id", "synced_at")
)


def _to_league(row: Mapping[str, Any], settings: Optional[Settings]) -> League:
    values = {name: row[name] for name in _ATTRIBUTE_COLUMNS}
    return League(league_id=int(row["league_id"]), settings=settings, **values)


class LeagueRegistry:
    """Keeps remote-origin league attributes fresh on every observation.

    League attributes and remote settings always come from the platform;
    only the settings' local policy is owned here and survives refreshes.
    """

    def __init__(self, engine: Engine, settings_store: ConfigurationStore) -> None:
        self.engine = engine
        self.settings_store = settings_store

    def exists(self, league_id: Any) -> bool:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(leagues.c.league_id).where(leagues.c.league_id == int(league_id))
            ).first()
        return row is not None

    def _insert(self, league: League) -> bool:
        with write_guard("league insert"):
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        insert(leagues).values(synced_at=utcnow(), **league.to_row())
                    )
            except IntegrityError:
                return False
        return True

    def _overwrite(self, league: League) -> None:
        row = league.to_row()
        row.pop("league_id")
        with write_guard("league update"), self.engine.begin() as conn:
            conn.execute(
                update(leagues)
                .where(leagues.c.league_id == league.league_id)
                .values(synced_at=utcnow(), **row)
            )

    def ensure_and_sync(
        self, league_id: Any, remote_league_attrs: Mapping[str, Any]
    ) -> Settings:
        """Insert or refresh a league observed on the remote platform.

        Returns the league's effective settings: the local policy paired
        with the remote settings snapshot just observed.
        """
        attrs = {**remote_league_attrs, "id": league_id}
        league = normalize_league(attrs)
        remote_settings = remote_settings_of(remote_league_attrs)

        if not self.exists(league.league_id) and self._insert(league):
            logger.info(
                "leagues: inserted league_id=%s name=%s", league.league_id, league.name
            )
        else:
            self._overwrite(league)
            logger.info("leagues: refreshed league_id=%s", league.league_id)

        if self.settings_store.exists(league.league_id):
            self.settings_store.refresh_remote(league.league_id, remote_settings)
            return self.settings_store.get(league.league_id)
        return self.settings_store.get(league.league_id, remote_settings)

    def get_complete(self, league_id: Any) -> Optional[League]:
        league_id = int(league_id)
        with self.engine.connect() as conn:
            row = conn.execute(
                select(leagues).where(leagues.c.league_id == league_id)
            ).mappings().first()
        if row is None:
            return None
        return _to_league(row, self.settings_store.get(league_id))

    def list_complete(self) -> list[League]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(leagues).order_by(leagues.c.league_id)
            ).mappings().all()
        return [
            _to_league(row, self.settings_store.get(row["league_id"])) for row in rows
        ]

    def delete(self, league_id: Any) -> bool:
        """Remove a league and its settings."""
        league_id = int(league_id)
        self.settings_store.delete(league_id)
        with write_guard("league delete"), self.engine.begin() as conn:
            result = conn.execute(delete(leagues).where(leagues.c.league_id == league_id))
        logger.info("leagues: deleted league_id=%s count=%s", league_id, result.rowcount)
        return result.rowcount > 0
