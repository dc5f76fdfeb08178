"""Cart package: models, reducer, persistence, store and provider."""
from .models import CartItem, CartState, Product
from .persistence import CartPersister
from .provider import CartProvider, use_cart
from .reducer import AddToCart, Decrement, Increment, reduce
from .service import CartStore

__all__ = [
    "Product",
    "CartItem",
    "CartState",
    "AddToCart",
    "Increment",
    "Decrement",
    "reduce",
    "CartPersister",
    "CartStore",
    "CartProvider",
    "use_cart",
]
