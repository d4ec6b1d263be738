import json


RAW_LEAGUE = {
    "id": 77,
    "name": "Liga Amigos",
    "competition": "la-liga",
    "scoreID": 5,
    "type": "normal",
    "mode": "classic",
    "marketMode": "auction",
    "created": 1690000000,
    "upgrades": {"premium": True},
    "settings": {"clause": {"enabled": True}},
}


def test_first_observation_inserts_league_and_default_settings(registry):
    settings = registry.ensure_and_sync(77, RAW_LEAGUE)

    assert settings.remote == {"clause": {"enabled": True}}
    assert settings.policy.clause_value == 200

    league = registry.get_complete(77)
    assert league.name == "Liga Amigos"
    assert league.score_id == 5
    assert league.market_mode == "auction"
    assert league.created_at == "1690000000"
    assert json.loads(league.upgrades_json) == {"premium": True}
    assert league.settings == settings


def test_refresh_overwrites_attributes_but_keeps_policy(registry, settings_store):
    registry.ensure_and_sync(77, RAW_LEAGUE)
    settings_store.update(77, {"clauseValue": 400})

    changed = {**RAW_LEAGUE, "name": "Renamed", "settings": {"clause": {"enabled": False}}}
    settings = registry.ensure_and_sync(77, changed)

    assert registry.get_complete(77).name == "Renamed"
    assert settings.remote == {"clause": {"enabled": False}}
    assert settings.policy.clause_value == 400


def test_existing_settings_are_reused_for_new_league(registry, settings_store):
    settings_store.update(77, {"maxClausesPerWeek": 4})
    settings = registry.ensure_and_sync(77, RAW_LEAGUE)
    assert settings.policy.max_clauses_per_week == 4
    assert settings.remote == RAW_LEAGUE["settings"]


def test_argument_id_wins_over_payload_id(registry):
    registry.ensure_and_sync("88", {**RAW_LEAGUE, "id": 77})
    assert registry.exists(88)
    assert not registry.exists(77)


def test_list_and_delete(registry, settings_store):
    registry.ensure_and_sync(2, {"name": "B"})
    registry.ensure_and_sync(1, {})

    leagues = registry.list_complete()
    assert [league.league_id for league in leagues] == [1, 2]
    assert leagues[0].name == "Unknown League"

    assert registry.delete(2) is True
    assert registry.get_complete(2) is None
    assert not settings_store.exists(2)
