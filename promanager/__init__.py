"""Public package exports for the pro manager core."""

from .config import ManagerConfig, load_config
from .errors import (
    ManagerError,
    NotConfigured,
    PersistenceFailure,
    RemoteFailure,
    ValidationError,
)
from .manager import ProManager, build_manager
from .schema.models import ClauseRecord, League, LocalPolicy, Settings
from .transfers import ClauseOutcome, ClauseResult, QuotaStatus, TransferOrchestrator
from .weeks import week_key_of

__all__ = [
    "ManagerConfig",
    "load_config",
    "ManagerError",
    "NotConfigured",
    "PersistenceFailure",
    "RemoteFailure",
    "ValidationError",
    "ProManager",
    "build_manager",
    "ClauseRecord",
    "League",
    "LocalPolicy",
    "Settings",
    "ClauseOutcome",
    "ClauseResult",
    "QuotaStatus",
    "TransferOrchestrator",
    "week_key_of",
]
