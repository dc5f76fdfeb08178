"""
Cart Errors

Centralized error messages and the exception types raised by the cart.
"""

# Wiring errors
ERROR_NOT_INITIALIZED = "CartStore.initialize() must complete before the cart is used"
ERROR_NO_PROVIDER = "use_cart must be used within a CartProvider"
ERROR_STORE_CLOSED = "CartStore is closed"

# Snapshot errors
ERROR_INVALID_JSON = "Stored cart is not valid JSON"
ERROR_INVALID_PAYLOAD = "Stored cart has an unexpected shape"
ERROR_UNSUPPORTED_VERSION = "Stored cart version is not supported"
ERROR_DUPLICATE_ITEM = "Stored cart contains the same product twice"

# Product errors
ERROR_INVALID_PRODUCT = "Invalid product"
ERROR_INVALID_PRICE = "price must be a non-negative number"

# Storage errors
ERROR_STORAGE_UNAVAILABLE = "Cart storage unavailable"


class CartError(Exception):
    """Base class for cart errors."""


class CorruptStateError(CartError):
    """The durable snapshot could not be parsed into a cart."""


class NotInitializedError(CartError):
    """The cart was used before or outside an initialized CartStore."""


class InvalidProductError(CartError, ValueError):
    """A product descriptor passed to add_to_cart failed validation."""


class StorageError(CartError):
    """The key-value store failed to read or write."""


__all__ = [
    "CartError",
    "CorruptStateError",
    "NotInitializedError",
    "InvalidProductError",
    "StorageError",
]
