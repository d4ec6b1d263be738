"""Biwenger API fetch helpers."""

from .client import BiwengerClient, RemoteResponse, context_headers
from .endpoints import (
    get_account,
    get_league,
    get_league_standings,
    get_leagues,
    get_user_players,
    login,
    submit_offer,
    submit_transfer,
)

__all__ = [
    "BiwengerClient",
    "RemoteResponse",
    "context_headers",
    "get_account",
    "get_league",
    "get_league_standings",
    "get_leagues",
    "get_user_players",
    "login",
    "submit_offer",
    "submit_transfer",
]
