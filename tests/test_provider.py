"""Tests for CartProvider and use_cart"""
import pytest

from marketplace.cart import CartPersister, CartProvider, CartState, CartStore, use_cart
from marketplace.errors import NotInitializedError

CART_KEY = "@GoMarketplace:products"


def _store(storage) -> CartStore:
    return CartStore(persister=CartPersister(storage, CART_KEY, max_attempts=1, backoff_seconds=0))


def test_use_cart_outside_provider():
    """Test use_cart fails loudly without a provider"""
    with pytest.raises(NotInitializedError, match="within a CartProvider"):
        use_cart()


@pytest.mark.asyncio
async def test_provider_initializes_and_binds(memory_store, sample_product):
    """Test the provider initializes the store and exposes it to use_cart"""
    store = _store(memory_store)

    async with CartProvider(store) as cart:
        assert cart is store
        assert cart.initialized
        assert use_cart() is store
        await use_cart().add_to_cart(sample_product)

    assert CartState.from_json(await memory_store.get(CART_KEY)).find("a").quantity == 1


@pytest.mark.asyncio
async def test_provider_unbinds_on_exit(memory_store):
    """Test the store is no longer reachable after the provider exits"""
    async with CartProvider(_store(memory_store)):
        pass

    with pytest.raises(NotInitializedError):
        use_cart()


@pytest.mark.asyncio
async def test_provider_unbinds_on_error(memory_store):
    """Test the binding is reset when the body raises"""
    with pytest.raises(RuntimeError):
        async with CartProvider(_store(memory_store)):
            raise RuntimeError("boom")

    with pytest.raises(NotInitializedError):
        use_cart()


@pytest.mark.asyncio
async def test_store_closed_after_provider(memory_store, sample_product):
    """Test a store handed out by the provider cannot be used after it exits"""
    async with CartProvider(_store(memory_store)) as cart:
        pass

    with pytest.raises(NotInitializedError):
        await cart.add_to_cart(sample_product)


@pytest.mark.asyncio
async def test_nested_providers(memory_store):
    """Test the innermost provider wins and the outer one is restored"""
    outer_store = _store(memory_store)
    inner_store = CartStore(persister=CartPersister(memory_store, "other-key", max_attempts=1))

    async with CartProvider(outer_store):
        async with CartProvider(inner_store):
            assert use_cart() is inner_store
        assert use_cart() is outer_store


@pytest.mark.asyncio
async def test_default_store(sample_product):
    """Test CartProvider builds a CartStore from config when none is given"""
    async with CartProvider() as cart:
        await cart.add_to_cart(sample_product)
        assert use_cart().products.find("a").quantity == 1
