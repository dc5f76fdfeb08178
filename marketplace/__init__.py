"""
Marketplace Cart Module

This package contains the client-side cart:
- cart: models, reducer, store, persistence and provider
- storage: durable key-value stores (Upstash Redis + in-memory)
- config: environment settings
- logging: centralized logging

Note: Imports are lazy so that importing the package does not
configure storage or logging before the application asks for it.
"""

__all__ = [
    "CartStore",
    "CartProvider",
    "use_cart",
    "get_storage",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from marketplace.cart import CartStore
        return CartStore
    elif name == "CartProvider":
        from marketplace.cart import CartProvider
        return CartProvider
    elif name == "use_cart":
        from marketplace.cart import use_cart
        return use_cart
    elif name == "get_storage":
        from marketplace.storage import get_storage
        return get_storage
    raise AttributeError(f"module 'marketplace' has no attribute '{name}'")
