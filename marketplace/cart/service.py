"""Cart store: in-memory cart state mirrored to a durable key-value store."""
import asyncio
from typing import Any, Callable, List, Mapping, Optional, Union

from pydantic import ValidationError

from marketplace import config
from marketplace.errors import (
    ERROR_INVALID_PRODUCT,
    ERROR_NOT_INITIALIZED,
    ERROR_STORE_CLOSED,
    CorruptStateError,
    InvalidProductError,
    NotInitializedError,
)
from marketplace.logging import describe_cart, get_logger, sanitize_id_for_logging
from marketplace.storage import KeyValueStore, get_storage
from .models import CartState, Product
from .persistence import CartPersister
from .reducer import AddToCart, CartAction, Decrement, Increment, reduce

logger = get_logger(__name__)

CartListener = Callable[[CartState], Any]


class CartStore:
    """
    Owns the cart for one session.

    Features:
    - Cold-start load of the snapshot stored under a fixed key
    - add_to_cart / increment / decrement through a pure reducer
    - Every state change is handed to a single background writer
    - Listeners notified with each new snapshot
    """

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        key: Optional[str] = None,
        persister: Optional[CartPersister] = None,
    ):
        if persister is None:
            persister = CartPersister(
                storage if storage is not None else get_storage(),
                key or config.CART_STORAGE_KEY,
            )
        self._persister = persister
        self._state = CartState.empty()
        self._initialized = False
        self._closed = False
        self._init_lock = asyncio.Lock()
        self._listeners: List[CartListener] = []

    @property
    def products(self) -> CartState:
        """Current cart snapshot (immutable)."""
        return self._state

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def persister(self) -> CartPersister:
        return self._persister

    async def initialize(self) -> CartState:
        """
        Load the stored snapshot, replacing the in-memory cart.

        A missing, corrupt or unreadable snapshot leaves the cart empty;
        none of these reach the caller. Calling again is a no-op.
        """
        async with self._init_lock:
            if self._initialized:
                return self._state

            state = await self._load()
            self._initialized = True
            if state is not None:
                self._set_state(state)
            return self._state

    async def _load(self) -> Optional[CartState]:
        key = self._persister.key
        try:
            data = await self._persister.storage.get(key)
        except Exception as e:
            logger.error(f"Failed to load cart from storage: {e}", exc_info=True)
            return None

        if not data:
            logger.info("No stored cart, starting empty")
            return None

        try:
            state = CartState.from_json(data)
        except CorruptStateError as e:
            logger.warning(f"Corrupted cart data under {key!r}, starting empty: {e}")
            return None

        logger.info(f"Loaded cart: {describe_cart(state)}")
        return state

    async def add_to_cart(self, product: Union[Product, Mapping[str, Any]]) -> CartState:
        """Add one unit of product; creates the line item at quantity 1 if new."""
        if not isinstance(product, Product):
            try:
                product = Product.model_validate(product)
            except ValidationError as e:
                raise InvalidProductError(f"{ERROR_INVALID_PRODUCT}: {e}") from e
        return self._dispatch(AddToCart(product))

    async def increment(self, product_id: str) -> CartState:
        """Add one unit of an item already in the cart. Unknown ids are ignored."""
        return self._dispatch(Increment(product_id))

    async def decrement(self, product_id: str) -> CartState:
        """Remove one unit; at quantity 1 the item leaves the cart. Unknown ids are ignored."""
        return self._dispatch(Decrement(product_id))

    def _dispatch(self, action: CartAction) -> CartState:
        # compute, adopt and schedule without yielding to the loop
        self._ensure_ready()
        current = self._state
        next_state = reduce(current, action)

        if next_state is current:
            logger.debug(
                f"{type(action).__name__} for unknown product "
                f"{sanitize_id_for_logging(getattr(action, 'product_id', None))}, cart unchanged"
            )
            return current

        self._set_state(next_state)
        self._persister.schedule(next_state)
        return next_state

    def _ensure_ready(self) -> None:
        if self._closed:
            raise NotInitializedError(ERROR_STORE_CLOSED)
        if not self._initialized:
            raise NotInitializedError(ERROR_NOT_INITIALIZED)

    def _set_state(self, state: CartState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Cart listener failed")

    def subscribe(self, listener: CartListener) -> Callable[[], None]:
        """Call listener with every new snapshot. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def flush(self) -> None:
        """Wait for scheduled writes to finish."""
        await self._persister.flush()

    async def aclose(self) -> None:
        """Flush pending writes and stop accepting mutations."""
        await self.flush()
        self._closed = True
        self._listeners.clear()
