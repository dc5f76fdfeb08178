"""
Centralized logging configuration for the marketplace cart.

Usage:
    from marketplace.logging import get_logger, describe_cart
    logger = get_logger(__name__)

    logger.info(f"Loaded cart: {describe_cart(state)}")
    logger.error("Failed to persist cart", exc_info=True)

LOG_LEVEL sets the root level. CART_LOG_LEVEL, when set, overrides the
level of the "marketplace.cart" logger only, so store and persister
activity can be traced at DEBUG without turning up everything else.
"""

import logging
import os
import sys
from functools import cache
from typing import Any, Optional

CART_LOGGER_NAME = "marketplace.cart"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Third-party loggers that talk for every Redis round-trip
NOISY_LOGGERS = ("upstash_redis", "httpx", "httpcore")


def _level_from_env(name: str, default: Optional[int]) -> Optional[int]:
    """Resolve a level name from env; unknown names give default."""
    level_name = os.environ.get(name, "").strip().upper()
    if not level_name:
        return default
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else default


def configure_logging() -> None:
    """
    Attach a stdout handler to the root logger and apply cart levels.

    The root handler is only added when nothing else configured logging
    first; the cart and third-party levels are always applied.
    """
    root = logging.getLogger()
    root_level = _level_from_env("LOG_LEVEL", logging.INFO)

    if not root.handlers:
        root.setLevel(root_level)
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(root_level)
        is_production = os.environ.get("APP_ENV", "").lower() == "production"
        handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
        root.addHandler(handler)

    cart_level = _level_from_env("CART_LOG_LEVEL", None)
    if cart_level is not None:
        logging.getLogger(CART_LOGGER_NAME).setLevel(cart_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# Configure once on module import
configure_logging()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def describe_cart(state: Any) -> str:
    """
    One-line summary of a cart snapshot for log messages.

    Only counts are logged; titles and prices never reach the logs.
    """
    items = getattr(state, "items", None) or ()
    units = sum(getattr(item, "quantity", 0) for item in items)
    return f"{len(items)} items, {units} units"


def sanitize_id_for_logging(id_value: str | None, max_length: int = 36) -> str:
    """
    Sanitize a product id for logging.

    Product ids come from the catalog the UI hands us, so control
    characters are escaped (CWE-117) and long ids are truncated.

    Args:
        id_value: ID value to sanitize (can be None)
        max_length: Maximum length to keep

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = (
        str(id_value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "CART_LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "describe_cart",
    "sanitize_id_for_logging",
]
