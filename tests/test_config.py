"""Tests for environment configuration"""
import importlib

import pytest

from marketplace import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload marketplace.config under patched env vars, restoring it afterwards"""
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config, monkeypatch):
    """Test defaults when nothing is set"""
    for name in ("CART_STORAGE_KEY", "CART_TTL_SECONDS", "CART_PERSIST_MAX_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)

    cfg = reload_config()

    assert cfg.CART_STORAGE_KEY == "@GoMarketplace:products"
    assert cfg.CART_TTL_SECONDS == 0
    assert cfg.CART_PERSIST_MAX_ATTEMPTS == 3


def test_overrides(reload_config):
    """Test values are read from the environment"""
    cfg = reload_config(
        CART_STORAGE_BACKEND=" Redis ",
        CART_STORAGE_KEY="cart:session",
        CART_TTL_SECONDS="3600",
        CART_PERSIST_MAX_ATTEMPTS="5",
        CART_PERSIST_BACKOFF_SECONDS="0.25",
    )

    assert cfg.CART_STORAGE_BACKEND == "redis"
    assert cfg.CART_STORAGE_KEY == "cart:session"
    assert cfg.CART_TTL_SECONDS == 3600
    assert cfg.CART_PERSIST_MAX_ATTEMPTS == 5
    assert cfg.CART_PERSIST_BACKOFF_SECONDS == 0.25


def test_invalid_numbers_fall_back(reload_config):
    """Test unparsable or out-of-range values use defaults"""
    cfg = reload_config(
        CART_TTL_SECONDS="soon",
        CART_PERSIST_MAX_ATTEMPTS="0",
        CART_PERSIST_BACKOFF_SECONDS="-1",
    )

    assert cfg.CART_TTL_SECONDS == 0
    assert cfg.CART_PERSIST_MAX_ATTEMPTS == 3
    assert cfg.CART_PERSIST_BACKOFF_SECONDS == 0.5
