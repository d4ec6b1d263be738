from datetime import datetime

from promanager.schema.models import DEFAULT_POLICY, ClauseRecord, League, Settings
from promanager.store.engine import normalize_row


def test_league_row_leaves_out_settings():
    league = League(league_id=77, name="Liga", settings=Settings(league_id=77))
    row = normalize_row(league)
    assert "settings" not in row
    assert row["league_id"] == 77


def test_clause_row_leaves_out_unassigned_id():
    record = ClauseRecord(
        from_user_id=1,
        from_user_name="Ana",
        to_user_id=2,
        to_user_name="Luis",
        player_id=10,
        player_name="Pedri",
        amount=100,
        occurred_at=datetime(2024, 6, 15, 10),
        week_key=202424,
    )
    assert "id" not in normalize_row(record)


def test_policy_merge_keeps_other_defaults():
    merged = DEFAULT_POLICY.merged({"clause_value": 300})
    assert merged.clause_value == 300
    assert merged.max_players_same_team == DEFAULT_POLICY.max_players_same_team
