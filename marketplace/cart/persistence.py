"""Background persistence of cart snapshots."""
import asyncio
from typing import Optional

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from marketplace import config
from marketplace.logging import describe_cart, get_logger
from marketplace.storage import KeyValueStore
from .models import CartState

logger = get_logger(__name__)

# Upper bound for a single backoff sleep between write attempts
MAX_BACKOFF_SECONDS = 10.0


class CartPersister:
    """
    Single writer for the cart key.

    schedule() never blocks: it records the snapshot as pending and makes
    sure one writer task is draining. The writer always takes the newest
    pending snapshot, so a slow write can be superseded but never lands
    after a newer one.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str,
        max_attempts: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
    ):
        self._storage = storage
        self._key = key
        self._max_attempts = max_attempts or config.CART_PERSIST_MAX_ATTEMPTS
        self._backoff_seconds = (
            config.CART_PERSIST_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        )
        self._pending: Optional[CartState] = None
        self._task: Optional[asyncio.Task] = None
        self.last_persisted: Optional[CartState] = None
        self.last_error: Optional[BaseException] = None

    @property
    def storage(self) -> KeyValueStore:
        return self._storage

    @property
    def key(self) -> str:
        return self._key

    @property
    def busy(self) -> bool:
        """True while a write is pending or in flight."""
        return self._task is not None and not self._task.done()

    def schedule(self, state: CartState) -> None:
        """Queue state as the next snapshot to write. Requires a running loop."""
        self._pending = state
        if not self.busy:
            self._task = asyncio.get_running_loop().create_task(self._drain())

    async def flush(self) -> None:
        """Wait until every scheduled snapshot has been written or given up on."""
        while self.busy:
            await self._task

    async def _drain(self) -> None:
        while self._pending is not None:
            state, self._pending = self._pending, None
            try:
                await self._write(state)
            except Exception as e:
                self.last_error = e
                logger.error(
                    f"Failed to persist cart ({describe_cart(state)}) after "
                    f"{self._max_attempts} attempts: {e}",
                    exc_info=True,
                )
            else:
                self.last_persisted = state
                self.last_error = None
                logger.debug(f"Persisted cart ({describe_cart(state)})")

    async def _write(self, state: CartState) -> None:
        payload = state.to_json()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=self._backoff_seconds, max=MAX_BACKOFF_SECONDS),
            retry=retry_if_exception_type(Exception),
            reraise=True,
        ):
            with attempt:
                await self._storage.set(self._key, payload)
