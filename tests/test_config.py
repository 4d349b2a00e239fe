import pytest

from even_service.config import load_settings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in ("PORT", "HOST", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.port == "8080"
    assert settings.host == "0.0.0.0"
    assert settings.log_level == "INFO"
    assert settings.log_json is False


def test_empty_port_uses_default(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "")
    assert load_settings().port == "8080"


def test_values_from_env(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_JSON", "True")
    settings = load_settings()
    assert settings.port == "9090"
    assert settings.host == "127.0.0.1"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is True


@pytest.mark.parametrize("value", ["verbose", "10", "   "])
def test_unknown_log_level_falls_back_to_info(monkeypatch, value: str) -> None:
    monkeypatch.setenv("LOG_LEVEL", value)
    assert load_settings().log_level == "INFO"
