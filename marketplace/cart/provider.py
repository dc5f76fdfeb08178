"""
Cart provider.

The store is a plain object built once at startup and handed to whoever
needs it. CartProvider additionally binds it to the current context so
deeper consumers can look it up with use_cart():

    async with CartProvider(CartStore()) as cart:
        await cart.add_to_cart(product)
        ...
        use_cart().products
"""
from contextvars import ContextVar, Token
from typing import Optional

from marketplace.errors import ERROR_NO_PROVIDER, NotInitializedError
from .service import CartStore

_current_cart: ContextVar[Optional[CartStore]] = ContextVar("_current_cart", default=None)


class CartProvider:
    """Async context manager owning a CartStore's lifetime."""

    def __init__(self, store: Optional[CartStore] = None):
        self.store = store if store is not None else CartStore()
        self._token: Optional[Token] = None

    async def __aenter__(self) -> CartStore:
        await self.store.initialize()
        self._token = _current_cart.set(self.store)
        return self.store

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.store.aclose()
        finally:
            if self._token is not None:
                _current_cart.reset(self._token)
                self._token = None


def use_cart() -> CartStore:
    """Get the CartStore bound by the enclosing CartProvider."""
    store = _current_cart.get()
    if store is None or not store.initialized:
        raise NotInitializedError(ERROR_NO_PROVIDER)
    return store
