"""Facade wiring the stores, the remote client and the orchestrator."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from sqlalchemy.engine import Engine

from .biwenger_api import BiwengerClient, get_league, get_leagues
from .config import ManagerConfig, load_config
from .credentials import BotCredentials
from .errors import NotConfigured, RemoteFailure, ValidationError
from .normalize.league import normalize_league
from .schema.models import League, Settings
from .store import ClauseLedger, ConfigurationStore, LeagueRegistry, create_tables, make_engine
from .transfers import ClauseResult, QuotaStatus, TransferOrchestrator

logger = logging.getLogger(__name__)


def _league_id(value: Any) -> int:
    try:
        league_id = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("invalid league id", field="leagueId") from exc
    if league_id <= 0:
        raise ValidationError("invalid league id", field="leagueId")
    return league_id


class ProManager:
    def __init__(
        self,
        *,
        engine: Optional[Engine] = None,
        client: Optional[BiwengerClient] = None,
        credentials: Optional[BotCredentials] = None,
    ) -> None:
        self.engine = engine
        self.client = client or BiwengerClient()
        self.settings_store: Optional[ConfigurationStore] = None
        self.ledger: Optional[ClauseLedger] = None
        self.registry: Optional[LeagueRegistry] = None
        if engine is not None:
            self.settings_store = ConfigurationStore(engine)
            self.ledger = ClauseLedger(engine)
            self.registry = LeagueRegistry(engine, self.settings_store)
        self.orchestrator = TransferOrchestrator(
            client=self.client,
            credentials=credentials,
            ledger=self.ledger,
            settings_store=self.settings_store,
        )

    def _require_settings_store(self) -> ConfigurationStore:
        if self.settings_store is None:
            raise NotConfigured("Settings service not available")
        return self.settings_store

    def get_settings(self, league_id: Any, token: Optional[str] = None) -> Settings:
        """Effective settings for a league, refreshed from the platform when
        a caller token is available."""
        store = self._require_settings_store()
        league_id = _league_id(league_id)
        remote_settings: Optional[dict[str, Any]] = None
        if token:
            try:
                raw_league = get_league(league_id, token, client=self.client)
            except RemoteFailure as exc:
                logger.warning("get_settings: remote lookup failed for %s: %s", league_id, exc)
                raw_league = None
            if raw_league and isinstance(raw_league.get("settings"), Mapping):
                remote_settings = dict(raw_league["settings"])
        return store.get(league_id, remote_settings)

    def update_settings(self, league_id: Any, patch: Mapping[str, Any]) -> bool:
        store = self._require_settings_store()
        if not isinstance(patch, Mapping):
            raise ValidationError("invalid payload")
        return store.update(_league_id(league_id), patch)

    def transfer(self, request: Mapping[str, Any]) -> str:
        return self.orchestrator.transfer(request)

    def clause(
        self,
        request: Mapping[str, Any],
        token: Optional[str],
        league_id: Any,
        acting_user_id: Any,
    ) -> ClauseResult:
        return self.orchestrator.clause(request, token, league_id, acting_user_id)

    def quota_status(
        self, league_id: Any, user_id: Any, week: Optional[int] = None
    ) -> QuotaStatus:
        return self.orchestrator.quota_status(_league_id(league_id), user_id, week)

    def _observe(self, raw_league: Mapping[str, Any]) -> League:
        league = normalize_league(raw_league)
        if self.registry is not None:
            league.settings = self.registry.ensure_and_sync(league.league_id, raw_league)
        return league

    def get_leagues(self, token: Optional[str]) -> list[League]:
        """List the caller's leagues, syncing each one into the registry."""
        if not token:
            return []
        leagues = [self._observe(raw) for raw in get_leagues(token, client=self.client)]
        logger.info("get_leagues: returning %s leagues", len(leagues))
        return leagues

    def get_league(self, league_id: Any, token: Optional[str]) -> Optional[League]:
        league_id = _league_id(league_id)
        if not token:
            return None
        raw_league = get_league(league_id, token, client=self.client)
        if raw_league is None:
            logger.info("get_league: league %s not found", league_id)
            return None
        return self._observe(raw_league)


def build_manager(config: Optional[ManagerConfig] = None) -> ProManager:
    """Composition root: one engine, one client, shared by every component."""
    resolved = config or load_config()
    engine = make_engine(resolved.database_url)
    create_tables(engine)
    return ProManager(
        engine=engine,
        client=BiwengerClient(
            base_url=resolved.base_url,
            connect_timeout_seconds=resolved.connect_timeout_seconds,
        ),
        credentials=BotCredentials.from_config(resolved),
    )
