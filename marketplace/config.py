"""
Cart Configuration

All settings come from environment variables and are read once at import.
"""

import os


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer env var, falling back to default when unset or invalid."""
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    """Read a float env var, falling back to default when unset or invalid."""
    raw = os.environ.get(name, "")
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


# Storage backend: "redis" (Upstash) or "memory"
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "memory").strip().lower()

# Fixed key under which the whole cart snapshot lives
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "") or "@GoMarketplace:products"

# Redis expiry for the snapshot in seconds (0 = keep forever)
CART_TTL_SECONDS = _env_int("CART_TTL_SECONDS", 0)

# Persistence retry policy (tenacity)
CART_PERSIST_MAX_ATTEMPTS = _env_int("CART_PERSIST_MAX_ATTEMPTS", 3, minimum=1)
CART_PERSIST_BACKOFF_SECONDS = _env_float("CART_PERSIST_BACKOFF_SECONDS", 0.5)

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
