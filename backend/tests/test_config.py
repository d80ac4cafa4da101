"""
Tests for environment-driven settings and the engine options derived from them.
"""

from flight_booking.core.config import Settings
from flight_booking.db.session import _engine_options


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_ECHO", "true")
    monkeypatch.setenv("FLIGHT_LIST_CACHE_TTL", "15")
    monkeypatch.setenv("CORS_ORIGINS", '["https://booking.example.com"]')

    settings = Settings(_env_file=None)

    assert settings.DATABASE_ECHO is True
    assert settings.FLIGHT_LIST_CACHE_TTL == 15
    assert settings.CORS_ORIGINS == ["https://booking.example.com"]


def test_pool_options_skipped_for_sqlite():
    assert _engine_options("sqlite+aiosqlite:///reservations.db") == {}

    options = _engine_options("postgresql+asyncpg://localhost/flight_booking")
    assert options["pool_pre_ping"] is True
    assert {"pool_size", "max_overflow", "pool_timeout", "pool_recycle"} <= options.keys()
