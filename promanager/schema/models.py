"""Canonical models for the manager store."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class LocalPolicy:
    """League rules owned locally; never overwritten by a remote refresh."""

    clauses_enabled: bool = False
    clause_value: int = 200
    max_clauses_per_week: int = 1
    max_times_claused_per_week: int = 1
    rounds_to_unlock: int = 2
    days_before_round_lock: int = 2
    max_players_same_team: int = 4

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LocalPolicy":
        values = {name: row[name] for name in cls.field_names()}
        values["clauses_enabled"] = bool(values["clauses_enabled"])
        return cls(**values)

    def merged(self, patch: Mapping[str, Any]) -> "LocalPolicy":
        return replace(self, **dict(patch))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_POLICY = LocalPolicy()


@dataclass(frozen=True)
class Settings:
    league_id: int
    remote: dict[str, Any] = field(default_factory=dict)
    policy: LocalPolicy = DEFAULT_POLICY

    def to_dict(self) -> dict[str, Any]:
        return {
            "league_id": self.league_id,
            "remote": dict(self.remote),
            **self.policy.to_dict(),
        }


@dataclass
class League:
    league_id: int
    name: str
    competition: Optional[str] = None
    score_id: Optional[int] = None
    type: Optional[str] = None
    mode: Optional[str] = None
    market_mode: Optional[str] = None
    created_at: Optional[str] = None
    icon: Optional[str] = None
    cover: Optional[str] = None
    upgrades_json: Optional[str] = None
    settings: Optional[Settings] = None

    def to_row(self) -> dict[str, Any]:
        row = asdict(self)
        row.pop("settings")
        return row


@dataclass(frozen=True)
class ClauseRecord:
    from_user_id: Optional[int]
    from_user_name: Optional[str]
    to_user_id: Optional[int]
    to_user_name: Optional[str]
    player_id: int
    player_name: Optional[str]
    amount: int
    occurred_at: datetime
    week_key: int
    id: Optional[int] = None

    def to_row(self) -> dict[str, Any]:
        row = asdict(self)
        if row["id"] is None:
            row.pop("id")
        return row
