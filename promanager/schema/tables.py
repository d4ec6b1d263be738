"""SQLAlchemy Core table definitions for the manager store."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

leagues = Table(
    "leagues",
    metadata,
    Column("league_id", Integer, primary_key=True, autoincrement=False),
    Column("name", Text, nullable=False),
    Column("competition", Text),
    Column("score_id", Integer),
    Column("type", Text),
    Column("mode", Text),
    Column("market_mode", Text),
    Column("created_at", Text),
    Column("icon", Text),
    Column("cover", Text),
    Column("upgrades_json", Text),
    Column("synced_at", DateTime, nullable=False),
)

settings = Table(
    "settings",
    metadata,
    Column("league_id", Integer, primary_key=True, autoincrement=False),
    Column("remote_settings_json", Text, nullable=False),
    Column("clauses_enabled", Boolean, nullable=False),
    Column("clause_value", Integer, nullable=False),
    Column("max_clauses_per_week", Integer, nullable=False),
    Column("max_times_claused_per_week", Integer, nullable=False),
    Column("rounds_to_unlock", Integer, nullable=False),
    Column("days_before_round_lock", Integer, nullable=False),
    Column("max_players_same_team", Integer, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False),
)

clauses = Table(
    "clauses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("from_user_id", Integer),
    Column("from_user_name", Text),
    Column("to_user_id", Integer),
    Column("to_user_name", Text),
    Column("player_id", Integer, nullable=False),
    Column("player_name", Text),
    Column("amount", Integer, nullable=False),
    Column("occurred_at", DateTime, nullable=False),
    Column("week_key", Integer, nullable=False),
    Index("idx_clauses_from_week", "from_user_id", "week_key"),
    Index("idx_clauses_to_week", "to_user_id", "week_key"),
    Index("idx_clauses_player_date", "player_id", "occurred_at"),
)
