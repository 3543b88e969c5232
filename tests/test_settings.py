import importlib
import sys

import pytest

PRODUCTION = "timeconnect.config.production"


@pytest.fixture
def fresh_production(monkeypatch):
    monkeypatch.delitem(sys.modules, PRODUCTION, raising=False)

    def _load():
        return importlib.import_module(PRODUCTION)

    return _load


@pytest.mark.parametrize("missing", ["SECRET_KEY", "JWT_SECRET"])
def test_production_refuses_to_start_without_secrets(monkeypatch, fresh_production, missing):
    monkeypatch.setenv("SECRET_KEY", "prod-session-secret")
    monkeypatch.setenv("JWT_SECRET", "prod-jwt-secret")
    monkeypatch.delenv(missing)

    with pytest.raises(RuntimeError, match=missing):
        fresh_production()


def test_production_blank_jwt_secret_is_rejected(monkeypatch, fresh_production):
    monkeypatch.setenv("SECRET_KEY", "prod-session-secret")
    monkeypatch.setenv("JWT_SECRET", "   ")

    with pytest.raises(RuntimeError):
        fresh_production()


def test_production_uses_configured_secrets(monkeypatch, fresh_production):
    monkeypatch.setenv("SECRET_KEY", "prod-session-secret")
    monkeypatch.setenv("JWT_SECRET", "prod-jwt-secret")

    settings = fresh_production()

    assert settings.JWT_SECRET == "prod-jwt-secret"
    assert settings.SECRET_KEY == "prod-session-secret"
    assert settings.DEBUG is False


def test_settings_module_selection(monkeypatch):
    from timeconnect.config import get_settings_module

    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == PRODUCTION
    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "timeconnect.config.testing"
