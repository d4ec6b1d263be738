"""Biwenger API endpoint helpers."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..errors import RemoteFailure
from .client import BiwengerClient, RemoteResponse, context_headers

logger = logging.getLogger(__name__)


def _client_or_default(client: Optional[BiwengerClient]) -> BiwengerClient:
    return client or BiwengerClient()


def login(
    email: str, password: str, client: Optional[BiwengerClient] = None
) -> Optional[str]:
    """Exchange credentials for a bearer token; ``None`` if none was issued."""
    try:
        response = _client_or_default(client).post_json(
            "/auth/login", {"email": email, "password": password}
        )
    except RemoteFailure as exc:
        logger.error("login failed: %s", exc)
        return None
    if not isinstance(response.payload, Mapping):
        return None
    return response.payload.get("token")


def get_account(
    token: str, client: Optional[BiwengerClient] = None
) -> dict[str, Any]:
    """Return the ``data`` block of ``/account`` (account plus leagues)."""
    response = _client_or_default(client).get_json(
        "/account", headers=context_headers(token)
    )
    return response.data() or {}


def get_leagues(
    token: str, client: Optional[BiwengerClient] = None
) -> list[dict[str, Any]]:
    return list(get_account(token, client=client).get("leagues") or [])


def get_league(
    league_id: Any, token: str, client: Optional[BiwengerClient] = None
) -> Optional[dict[str, Any]]:
    for league in get_leagues(token, client=client):
        if str(league.get("id")) == str(league_id):
            return league
    return None


def get_league_standings(
    token: str,
    league_id: Any,
    user_id: Any,
    client: Optional[BiwengerClient] = None,
) -> list[dict[str, Any]]:
    response = _client_or_default(client).get_json(
        "/league",
        params={
            "include": "all,-lastAccess",
            "fields": "*,standings,tournaments,group,settings(description)",
        },
        headers=context_headers(token, league_id, user_id),
    )
    return list((response.data() or {}).get("standings") or [])


def get_user_players(
    token: str,
    league_id: Any,
    user_id: Any,
    client: Optional[BiwengerClient] = None,
) -> list[dict[str, Any]]:
    response = _client_or_default(client).get_json(
        f"/user/{user_id}",
        params={"fields": "*,account(id),players(id,owner)"},
        headers=context_headers(token, league_id, user_id),
    )
    return list((response.data() or {}).get("players") or [])


def submit_transfer(
    token: Optional[str],
    league_id: Any,
    acting_user_id: Any,
    payload: Mapping[str, Any],
    client: Optional[BiwengerClient] = None,
) -> RemoteResponse:
    return _client_or_default(client).post_json(
        f"/league/{league_id}/transfer",
        dict(payload),
        headers=context_headers(token, league_id, acting_user_id),
    )


def submit_offer(
    token: Optional[str],
    league_id: Any,
    acting_user_id: Any,
    payload: Mapping[str, Any],
    client: Optional[BiwengerClient] = None,
) -> RemoteResponse:
    return _client_or_default(client).post_json(
        "/offers",
        dict(payload),
        headers=context_headers(token, league_id, acting_user_id),
    )
