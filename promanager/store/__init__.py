"""Persistence layer: engine helpers and the three stores."""

from .clause_ledger import ClauseLedger
from .engine import create_tables, make_engine
from .league_registry import LeagueRegistry
from .settings_store import ConfigurationStore

__all__ = [
    "ClauseLedger",
    "ConfigurationStore",
    "LeagueRegistry",
    "create_tables",
    "make_engine",
]
