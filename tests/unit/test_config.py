import pytest

from promanager.config import DEFAULT_DATABASE_URL, load_config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr("promanager.config.load_dotenv", lambda: None)
    for name in (
        "PROMANAGER_DATABASE_URL",
        "BIWENGER_BASE_URL",
        "BIWENGER_CONNECT_TIMEOUT",
        "BOT_EMAIL",
        "BOT_PASSWORD",
        "CONFIG_SECRET",
        "PROMANAGER_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.database_url == DEFAULT_DATABASE_URL
    assert config.connect_timeout_seconds == 10
    assert config.bot_email is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PROMANAGER_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("BIWENGER_CONNECT_TIMEOUT", "3")
    monkeypatch.setenv("BOT_EMAIL", "ENC:abc")
    config = load_config()
    assert config.database_url == "sqlite://"
    assert config.connect_timeout_seconds == 3
    assert config.bot_email == "ENC:abc"


def test_bad_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("BIWENGER_CONNECT_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="BIWENGER_CONNECT_TIMEOUT"):
        load_config()
