"""Ordered alias tables for fields that arrive under several names.

Remote payloads and caller requests spell the same logical value in
different ways. Each table lists candidate keys in priority order; dotted
keys walk into nested mappings.
"""

from __future__ import annotations

from typing import Any, Mapping

REQUEST_ALIASES: dict[str, tuple[str, ...]] = {
    "league_id": ("leagueId", "x_league", "xLeague"),
    "acting_user_id": ("userId", "x_user", "xUser", "fromUserId"),
    "player_id": ("playerId", "player.id"),
    "player_name": ("playerName", "player.name"),
    "from_user_id": ("fromUserId",),
    "from_user_name": ("fromUserName", "fromUserId"),
    "to_user_id": ("toUserId",),
    "to_user_name": ("toUserName", "toUserId"),
    "amount": ("amount",),
    "date": ("date",),
}

LEAGUE_ALIASES: dict[str, tuple[str, ...]] = {
    "league_id": ("id", "_id", "league_id"),
    "name": ("name",),
    "competition": ("competition",),
    "score_id": ("scoreID", "scoreId", "score_id"),
    "type": ("type",),
    "mode": ("mode",),
    "market_mode": ("marketMode", "market_mode"),
    "created_at": ("created", "createdAt", "created_at"),
    "icon": ("icon",),
    "cover": ("cover",),
    "upgrades": ("upgrades",),
    "settings": ("settings",),
}

POLICY_ALIASES: dict[str, tuple[str, ...]] = {
    "clauses_enabled": ("clausesEnabled", "clauses_enabled", "clauses"),
    "clause_value": ("clauseValue", "clause_value", "clauses_value"),
    "max_clauses_per_week": (
        "maxClausesPerWeek",
        "max_clauses_per_week",
        "times_can_clause",
    ),
    "max_times_claused_per_week": (
        "maxTimesClausedPerWeek",
        "max_times_claused_per_week",
        "max_times_claused",
    ),
    "rounds_to_unlock": (
        "roundsToUnlock",
        "rounds_to_unlock",
        "num_rounds_to_unlock",
    ),
    "days_before_round_lock": (
        "daysBeforeRoundLock",
        "days_before_round_lock",
        "num_days_before_round",
    ),
    "max_players_same_team": ("maxPlayersSameTeam", "max_players_same_team"),
}

OFFER_ALIASES: dict[str, tuple[str, ...]] = {
    "status": ("status",),
    "message": ("message",),
    "user_message": ("userMessage", "user_message"),
    "code": ("code",),
}

_MISSING = object()


def _lookup(payload: Mapping[str, Any], key: str) -> Any:
    current: Any = payload
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]
    return current


def resolve(
    payload: Mapping[str, Any],
    field: str,
    table: Mapping[str, tuple[str, ...]] = REQUEST_ALIASES,
    default: Any = None,
) -> Any:
    """Return the first non-None value found for ``field``'s aliases."""
    for key in table[field]:
        value = _lookup(payload, key)
        if value is not _MISSING and value is not None:
            return value
    return default

