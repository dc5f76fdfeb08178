"""Pytest configuration and fixtures"""
import asyncio
import os
from typing import Optional
from unittest.mock import AsyncMock

import pytest

# Set test environment variables before marketplace.config is imported
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("CART_PERSIST_BACKOFF_SECONDS", "0")

from marketplace.storage import InMemoryKeyValueStore, reset_storage  # noqa: E402

CART_KEY = "@GoMarketplace:products"


class SlowKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose writes take a configurable time per value."""

    def __init__(self):
        super().__init__()
        self.delays = {}
        self.writes = []

    async def set(self, key: str, value: str) -> None:
        self.writes.append(value)
        delay: Optional[float] = self.delays.pop(len(self.writes), None)
        if delay:
            await asyncio.sleep(delay)
        await super().set(key, value)


@pytest.fixture(autouse=True)
def _reset_storage_singleton():
    reset_storage()
    yield
    reset_storage()


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store"""
    return InMemoryKeyValueStore()


@pytest.fixture
def slow_store():
    """Store whose n-th write can be delayed via store.delays[n] = seconds"""
    return SlowKeyValueStore()


@pytest.fixture
def failing_store():
    """Mock store whose writes always fail"""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock(side_effect=ConnectionError("storage down"))
    return store


@pytest.fixture
def sample_product():
    """Sample product descriptor as the catalog screen passes it"""
    return {
        "id": "a",
        "title": "Shoe",
        "image_url": "https://cdn.example.com/shoe.png",
        "price": 10,
    }


@pytest.fixture
def other_product():
    """Second sample product"""
    return {
        "id": "b",
        "title": "Backpack",
        "image_url": "https://cdn.example.com/backpack.png",
        "price": "89.90",
    }
