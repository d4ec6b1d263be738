"""Normalization helpers for league payloads."""

from __future__ import annotations

import json
from typing import Any, Mapping

from ..aliases import LEAGUE_ALIASES, resolve
from ..schema.models import League


def _json_dumps(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value)


def _int_or_none(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def normalize_league(raw_league: Mapping[str, Any]) -> League:
    league_id = _int_or_none(resolve(raw_league, "league_id", LEAGUE_ALIASES))
    if league_id is None:
        raise ValueError("league payload has no usable id")
    return League(
        league_id=league_id,
        name=str(resolve(raw_league, "name", LEAGUE_ALIASES, "Unknown League")),
        competition=_str_or_none(resolve(raw_league, "competition", LEAGUE_ALIASES)),
        score_id=_int_or_none(resolve(raw_league, "score_id", LEAGUE_ALIASES)),
        type=_str_or_none(resolve(raw_league, "type", LEAGUE_ALIASES)),
        mode=_str_or_none(resolve(raw_league, "mode", LEAGUE_ALIASES)),
        market_mode=_str_or_none(resolve(raw_league, "market_mode", LEAGUE_ALIASES)),
        created_at=_str_or_none(resolve(raw_league, "created_at", LEAGUE_ALIASES)),
        icon=_str_or_none(resolve(raw_league, "icon", LEAGUE_ALIASES)),
        cover=_str_or_none(resolve(raw_league, "cover", LEAGUE_ALIASES)),
        upgrades_json=_json_dumps(resolve(raw_league, "upgrades", LEAGUE_ALIASES)),
    )


def remote_settings_of(raw_league: Mapping[str, Any]) -> dict[str, Any]:
    remote = resolve(raw_league, "settings", LEAGUE_ALIASES)
    return dict(remote) if isinstance(remote, Mapping) else {}
