"""Transfer and clause orchestration against the remote platform.

Transfers run under the bot identity; clauses run under the caller's own
token and are recorded in the clause ledger once the platform accepts them.
Quota limits are advisory: nothing here blocks a clause that would exceed
them, and concurrent clauses can overshoot the weekly limits.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError

from .aliases import resolve
from .biwenger_api import BiwengerClient, get_account, login, submit_offer, submit_transfer
from .credentials import BotCredentials
from .errors import ManagerError, NotConfigured, PersistenceFailure, RemoteFailure, ValidationError
from .normalize.offers import OfferResult, normalize_offer_result
from .schema.models import ClauseRecord, Settings
from .store.clause_ledger import ClauseLedger
from .store.settings_store import ConfigurationStore
from .weeks import parse_date, week_key_of

logger = logging.getLogger(__name__)

MAX_NOTES_LENGTH = 1000


class ClauseOutcome(str, Enum):
    REJECTED = "rejected"
    COMMITTED = "committed"
    COMMITTED_BUT_UNLOGGED = "committed_but_unlogged"


@dataclass(frozen=True)
class ClauseResult:
    status: int
    message: str
    user_message: str
    code: Optional[int]
    outcome: ClauseOutcome
    settings: Optional[Settings] = None
    record_id: Optional[int] = None

    @property
    def accepted(self) -> bool:
        return self.outcome is not ClauseOutcome.REJECTED

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "message": self.message,
            "userMessage": self.user_message,
            "code": self.code,
            "outcome": self.outcome.value,
            "settings": self.settings.to_dict() if self.settings else None,
        }


@dataclass(frozen=True)
class QuotaStatus:
    """Weekly clause counters for one user against the league policy.

    A clause moves a player from ``from_user_id`` to ``to_user_id``, so the
    clauses a user made are the incoming records and the times they were
    claused are the outgoing ones.
    """

    league_id: int
    user_id: int
    week_key: int
    clauses_made: int
    times_claused: int
    max_clauses_per_week: int
    max_times_claused_per_week: int

    @property
    def remaining_clauses(self) -> int:
        return max(self.max_clauses_per_week - self.clauses_made, 0)

    @property
    def remaining_times_claused(self) -> int:
        return max(self.max_times_claused_per_week - self.times_claused, 0)

    @property
    def exceeded(self) -> bool:
        return (
            self.clauses_made > self.max_clauses_per_week
            or self.times_claused > self.max_times_claused_per_week
        )


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _require(request: Mapping[str, Any], keys: tuple[str, ...]) -> None:
    for key in keys:
        if request.get(key) is None:
            raise ValidationError(f"missing field: {key}", field=key)


def _positive_int(request: Mapping[str, Any], key: str) -> int:
    number = _numeric(request[key])
    if number is None or int(number) <= 0:
        raise ValidationError(f"{key} must be positive integer", field=key)
    return int(number)


def _non_negative(request: Mapping[str, Any], key: str) -> float:
    number = _numeric(request[key])
    if number is None:
        raise ValidationError(f"{key} must be numeric", field=key)
    if number < 0:
        raise ValidationError(f"{key} must be non-negative", field=key)
    return number


def validate_transfer_request(request: Any) -> dict[str, Any]:
    """Check a transfer payload and return the copy that will be submitted."""
    if not isinstance(request, Mapping) or not request:
        raise ValidationError("invalid payload")
    _require(request, ("playerId", "fromUserId", "toUserId"))
    _positive_int(request, "playerId")
    from_user_id = _positive_int(request, "fromUserId")
    to_user_id = _positive_int(request, "toUserId")
    if from_user_id == to_user_id:
        raise ValidationError("fromUserId and toUserId must be different")
    if request.get("price") is not None:
        _non_negative(request, "price")

    payload = dict(request)
    if payload.get("notes") is not None:
        payload["notes"] = str(payload["notes"])[:MAX_NOTES_LENGTH]
    return payload


def validate_clause_request(request: Any) -> dict[str, Any]:
    """Check a clause payload and return the copy that will be submitted."""
    if not isinstance(request, Mapping) or not request:
        raise ValidationError("invalid payload")
    _require(request, ("playerId", "clauseType", "amount"))
    _positive_int(request, "playerId")
    if not str(request["clauseType"]).strip():
        raise ValidationError("clauseType must be non-empty string", field="clauseType")
    _non_negative(request, "amount")
    return dict(request)


def _int_or_none(value: Any) -> Optional[int]:
    number = _numeric(value)
    return None if number is None else int(number)


def _str_or_none(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def build_clause_record(payload: Mapping[str, Any]) -> ClauseRecord:
    """Build the ledger entry for an accepted clause.

    Raises ``ValueError`` when the request date cannot be parsed.
    """
    occurred_at = parse_date(resolve(payload, "date"))
    return ClauseRecord(
        from_user_id=_int_or_none(resolve(payload, "from_user_id")),
        from_user_name=_str_or_none(resolve(payload, "from_user_name")),
        to_user_id=_int_or_none(resolve(payload, "to_user_id")),
        to_user_name=_str_or_none(resolve(payload, "to_user_name")),
        player_id=int(_numeric(resolve(payload, "player_id"))),
        player_name=_str_or_none(resolve(payload, "player_name")),
        amount=int(_numeric(resolve(payload, "amount", default=0)) or 0),
        occurred_at=occurred_at,
        week_key=week_key_of(occurred_at),
    )


class TransferOrchestrator:
    def __init__(
        self,
        *,
        client: Optional[BiwengerClient] = None,
        credentials: Optional[BotCredentials] = None,
        ledger: Optional[ClauseLedger] = None,
        settings_store: Optional[ConfigurationStore] = None,
    ) -> None:
        self.client = client or BiwengerClient()
        self.credentials = credentials
        self.ledger = ledger
        self.settings_store = settings_store

    # -- transfers -----------------------------------------------------

    def _bot_token(self) -> Optional[str]:
        if self.credentials is None:
            raise NotConfigured("bot credentials are not configured")
        email, password = self.credentials.resolve()
        token = login(email, password, client=self.client)
        if not token:
            logger.warning("transfer: bot login returned no token")
        return token

    def _bot_member_id(self, token: Optional[str], league_id: Any) -> Optional[Any]:
        """The bot's own user id inside ``league_id`` (for the x-user header)."""
        if not token:
            return None
        try:
            account = get_account(token, client=self.client)
        except RemoteFailure as exc:
            logger.error("transfer: could not load bot account: %s", exc)
            return None
        for league in account.get("leagues") or []:
            if str(league.get("id")) == str(league_id):
                return (league.get("user") or {}).get("id")
        logger.warning("transfer: bot is not a member of league %s", league_id)
        return None

    def transfer(self, request: Mapping[str, Any]) -> str:
        """Move a player between two users with the bot's standing.

        Returns the platform's user-facing message as-is.
        """
        payload = validate_transfer_request(request)
        league_id = resolve(payload, "league_id")
        if league_id is None or str(league_id).strip() == "":
            raise ValidationError("leagueId is required", field="leagueId")

        logger.info(
            "transfer: league=%s player_id=%s from=%s to=%s",
            league_id,
            payload["playerId"],
            payload["fromUserId"],
            payload["toUserId"],
        )
        token = self._bot_token()
        member_id = self._bot_member_id(token, league_id)
        try:
            response = submit_transfer(
                token, league_id, member_id, payload, client=self.client
            )
        except RemoteFailure as exc:
            raise RemoteFailure("transfer request failed", status=exc.status) from exc

        body = response.payload if isinstance(response.payload, Mapping) else {}
        message = body.get("userMessage")
        logger.info(
            "transfer: remote status=%s message=%s",
            response.status_code,
            str(message)[:200],
        )
        return "" if message is None else str(message)

    # -- clauses -------------------------------------------------------

    def _settings(self, league_id: Any) -> Optional[Settings]:
        if self.settings_store is None or league_id is None:
            return None
        try:
            return self.settings_store.get(league_id)
        except (ManagerError, SQLAlchemyError, ValueError) as exc:
            logger.error("clause: could not load settings for league %s: %s", league_id, exc)
            return None

    def _record(self, payload: Mapping[str, Any]) -> tuple[Optional[ClauseRecord], ClauseOutcome]:
        if self.ledger is None:
            logger.warning("clause: no ledger configured, clause not recorded")
            return None, ClauseOutcome.COMMITTED_BUT_UNLOGGED
        try:
            record = build_clause_record(payload)
            record_id = self.ledger.append(record)
        except (PersistenceFailure, ValueError, TypeError) as exc:
            logger.error("clause: accepted remotely but not recorded: %s", exc)
            return None, ClauseOutcome.COMMITTED_BUT_UNLOGGED
        return replace(record, id=record_id), ClauseOutcome.COMMITTED

    def _warn_over_quota(self, league_id: Any, record: ClauseRecord) -> None:
        try:
            if record.to_user_id is not None:
                status = self.quota_status(league_id, record.to_user_id, record.week_key)
                if status.clauses_made > status.max_clauses_per_week:
                    logger.warning(
                        "clause: user %s made %s clauses in week %s (limit %s)",
                        status.user_id,
                        status.clauses_made,
                        status.week_key,
                        status.max_clauses_per_week,
                    )
            if record.from_user_id is not None:
                status = self.quota_status(league_id, record.from_user_id, record.week_key)
                if status.times_claused > status.max_times_claused_per_week:
                    logger.warning(
                        "clause: user %s was claused %s times in week %s (limit %s)",
                        status.user_id,
                        status.times_claused,
                        status.week_key,
                        status.max_times_claused_per_week,
                    )
        except (ManagerError, SQLAlchemyError, ValueError) as exc:
            logger.error("clause: quota check failed: %s", exc)

    def clause(
        self,
        request: Mapping[str, Any],
        caller_token: Optional[str],
        league_id: Any,
        acting_user_id: Any,
    ) -> ClauseResult:
        """Submit a clause offer as the caller and record it once accepted."""
        payload = validate_clause_request(request)
        logger.info(
            "clause: league=%s player_id=%s amount=%s",
            league_id,
            payload["playerId"],
            payload["amount"],
        )
        try:
            response = submit_offer(
                caller_token, league_id, acting_user_id, payload, client=self.client
            )
        except RemoteFailure as exc:
            raise RemoteFailure("clause request failed", status=exc.status) from exc

        offer: OfferResult = normalize_offer_result(response)
        if not offer.accepted and response.payload is None:
            raise RemoteFailure("clause request failed", status=response.status_code)
        if not offer.accepted:
            logger.info("clause: rejected status=%s code=%s", offer.status, offer.code)
            return self._result(offer, ClauseOutcome.REJECTED, league_id)

        record, outcome = self._record(payload)
        if record is not None and league_id is not None and self.settings_store is not None:
            self._warn_over_quota(league_id, record)
        return self._result(
            offer, outcome, league_id, record.id if record is not None else None
        )

    def _result(
        self,
        offer: OfferResult,
        outcome: ClauseOutcome,
        league_id: Any,
        record_id: Optional[int] = None,
    ) -> ClauseResult:
        return ClauseResult(
            status=offer.status,
            message=offer.message,
            user_message=offer.user_message,
            code=offer.code,
            outcome=outcome,
            settings=self._settings(league_id),
            record_id=record_id,
        )

    def quota_status(
        self, league_id: Any, user_id: Any, week: Optional[int] = None
    ) -> QuotaStatus:
        if self.ledger is None or self.settings_store is None:
            raise NotConfigured("quota status needs both the ledger and settings store")
        week_key = int(week) if week is not None else week_key_of(None)
        policy = self.settings_store.get(league_id).policy
        return QuotaStatus(
            league_id=int(league_id),
            user_id=int(user_id),
            week_key=week_key,
            clauses_made=self.ledger.count_incoming(user_id, week_key),
            times_claused=self.ledger.count_outgoing(user_id, week_key),
            max_clauses_per_week=policy.max_clauses_per_week,
            max_times_claused_per_week=policy.max_times_claused_per_week,
        )
