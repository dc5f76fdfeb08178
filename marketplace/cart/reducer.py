"""
Cart Reducer

Pure state transitions: reduce(state, action) -> state.
No I/O here; persistence is the store's side effect.

Unknown ids on Increment/Decrement return the state unchanged.
"""
from dataclasses import dataclass
from typing import Union

from .models import CartItem, CartState, Product


@dataclass(frozen=True)
class AddToCart:
    """Add one unit of a product (new line item at quantity 1)."""
    product: Product


@dataclass(frozen=True)
class Increment:
    product_id: str


@dataclass(frozen=True)
class Decrement:
    """Remove one unit; the line item disappears when it reaches zero."""
    product_id: str


CartAction = Union[AddToCart, Increment, Decrement]


def _increment(state: CartState, product_id: str) -> CartState:
    index = state.index_of(product_id)
    if index < 0:
        return state

    items = list(state.items)
    items[index] = items[index].with_quantity(items[index].quantity + 1)
    return CartState(items=tuple(items))


def _decrement(state: CartState, product_id: str) -> CartState:
    index = state.index_of(product_id)
    if index < 0:
        return state

    item = state.items[index]
    if item.quantity <= 1:
        items = state.items[:index] + state.items[index + 1:]
    else:
        items = list(state.items)
        items[index] = item.with_quantity(item.quantity - 1)
    return CartState(items=tuple(items))


def _add(state: CartState, product: Product) -> CartState:
    if state.index_of(product.id) >= 0:
        return _increment(state, product.id)
    return CartState(items=state.items + (CartItem.from_product(product),))


def reduce(state: CartState, action: CartAction) -> CartState:
    """Compute the next cart state for an action."""
    if isinstance(action, AddToCart):
        return _add(state, action.product)
    if isinstance(action, Increment):
        return _increment(state, action.product_id)
    if isinstance(action, Decrement):
        return _decrement(state, action.product_id)
    raise TypeError(f"Unknown cart action: {type(action).__name__}")
