"""Schema models and table definitions."""

from .models import DEFAULT_POLICY, ClauseRecord, League, LocalPolicy, Settings
from .tables import clauses, leagues, metadata, settings

__all__ = [
    "DEFAULT_POLICY",
    "ClauseRecord",
    "League",
    "LocalPolicy",
    "Settings",
    "clauses",
    "leagues",
    "metadata",
    "settings",
]
