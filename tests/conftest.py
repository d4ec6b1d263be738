import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from promanager.biwenger_api.client import RemoteResponse
from promanager.credentials import BotCredentials
from promanager.store import ClauseLedger, ConfigurationStore, LeagueRegistry, create_tables


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def settings_store(engine):
    return ConfigurationStore(engine)


@pytest.fixture
def ledger(engine):
    return ClauseLedger(engine)


@pytest.fixture
def registry(engine, settings_store):
    return LeagueRegistry(engine, settings_store)


@pytest.fixture
def bot_credentials():
    return BotCredentials(email="bot@example.com", password="hunter2")


class FakeRemote:
    """Records every remote call and answers with canned payloads."""

    def __init__(self):
        self.calls = []
        self.token = "bot-token"
        self.account = {
            "leagues": [{"id": 77, "name": "Liga", "user": {"id": 9001}}]
        }
        self.transfer_response = RemoteResponse(
            200, {"status": 200, "userMessage": "Transfer done"}
        )
        self.offer_response = RemoteResponse(200, {"status": 200, "code": 0})
        self.offer_error = None
        self.transfer_error = None
        self.leagues = []

    def login(self, email, password, client=None):
        self.calls.append(("login", email))
        return self.token

    def get_account(self, token, client=None):
        self.calls.append(("get_account", token))
        return self.account

    def submit_transfer(self, token, league_id, acting_user_id, payload, client=None):
        self.calls.append(("submit_transfer", token, league_id, acting_user_id, payload))
        if self.transfer_error is not None:
            raise self.transfer_error
        return self.transfer_response

    def submit_offer(self, token, league_id, acting_user_id, payload, client=None):
        self.calls.append(("submit_offer", token, league_id, acting_user_id, payload))
        if self.offer_error is not None:
            raise self.offer_error
        return self.offer_response

    def get_leagues(self, token, client=None):
        self.calls.append(("get_leagues", token))
        return self.leagues

    def get_league(self, league_id, token, client=None):
        self.calls.append(("get_league", league_id, token))
        for league in self.leagues:
            if str(league.get("id")) == str(league_id):
                return league
        return None


@pytest.fixture
def fake_remote(monkeypatch):
    import promanager.manager as manager_module
    import promanager.transfers as transfers_module

    remote = FakeRemote()
    for name in ("login", "get_account", "submit_transfer", "submit_offer"):
        monkeypatch.setattr(transfers_module, name, getattr(remote, name))
    for name in ("get_league", "get_leagues"):
        monkeypatch.setattr(manager_module, name, getattr(remote, name))
    return remote
