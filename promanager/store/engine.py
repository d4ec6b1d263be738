"""Engine and DDL helpers shared by the stores."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceFailure
from ..schema.tables import metadata

logger = logging.getLogger(__name__)


def make_engine(database_url: str, **kwargs: Any) -> Engine:
    """Build the single process-wide engine; callers inject it into stores."""
    return create_engine(database_url, future=True, **kwargs)


def create_tables(bind) -> None:
    metadata.create_all(bind)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_datetime(value: datetime) -> datetime:
    """Store datetimes as naive UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def normalize_row(row: Any) -> Mapping[str, Any]:
    if hasattr(row, "to_row"):
        return row.to_row()
    if is_dataclass(row):
        return asdict(row)
    if isinstance(row, Mapping):
        return row
    raise TypeError("Row must be dataclass, Mapping, or expose to_row().")


@contextmanager
def write_guard(action: str) -> Iterator[None]:
    """Re-raise storage errors from a write as ``PersistenceFailure``."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("%s failed: %s", action, exc)
        raise PersistenceFailure(f"{action} failed: {exc}") from exc
