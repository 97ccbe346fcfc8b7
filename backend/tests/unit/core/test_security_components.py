"""Unit tests for building the authentication components."""

from __future__ import annotations

from datetime import timedelta

import fakeredis
import pytest
from flask import Flask

from authapi.core.config import PLACEHOLDER_SECRET, ProductionConfig, TestingConfig
from authapi.core.security import build_components
from authapi.infra.redis.redis_token_blacklist import RedisTokenBlacklist
from authapi.services._shared.ports import InMemoryTokenBlacklist


def _app(config, **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config)
    app.config.update(overrides)
    return app


def test_production_refuses_placeholder_secret():
    app = _app(ProductionConfig, JWT_SECRET_KEY=PLACEHOLDER_SECRET)
    with pytest.raises(RuntimeError, match="JWT_SECRET_KEY"):
        build_components(app)


def test_production_refuses_empty_secret():
    app = _app(ProductionConfig, JWT_SECRET_KEY="")
    with pytest.raises(RuntimeError):
        build_components(app)


def test_settings_come_from_config():
    app = _app(TestingConfig, JWT_EXPIRES_IN="2h", PASSWORD_MIN_LENGTH=10)
    components = build_components(app)
    assert components.settings.secret == TestingConfig.JWT_SECRET_KEY
    assert components.settings.expires_in == timedelta(hours=2)
    assert components.password_min_length == 10
    assert components.cookie.name == "auth_token"
    assert components.cookie.samesite == "Strict"
    assert components.cookie.secure is False


def test_blacklist_is_in_memory_without_redis():
    assert isinstance(build_components(_app(TestingConfig)).blacklist, InMemoryTokenBlacklist)


def test_blacklist_uses_registered_redis_client():
    app = _app(TestingConfig)
    app.extensions["redis_client"] = fakeredis.FakeRedis()
    assert isinstance(build_components(app).blacklist, RedisTokenBlacklist)
