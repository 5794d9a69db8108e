"""Tests for shopper session storage."""

import threading

from home_kitchen.services.shoppers import InMemoryShopperSessionStore
from tests.conftest import make_dish


def test_get_or_create_reuses_known_session() -> None:
    store = InMemoryShopperSessionStore(ttl_seconds=60)

    first = store.get_or_create(None)
    first.cart.add(make_dish("a"))
    again = store.get_or_create(first.id)

    assert again is first
    assert again.cart.item_count() == 1
    assert len(store) == 1


def test_unknown_id_gets_fresh_session() -> None:
    store = InMemoryShopperSessionStore(ttl_seconds=60)

    session = store.get_or_create("forged-id")

    assert session.id != "forged-id"
    assert session.cart.is_empty()


def test_expired_sessions_are_dropped() -> None:
    store = InMemoryShopperSessionStore(ttl_seconds=0)

    first = store.get_or_create(None)
    first.cart.add(make_dish("a"))
    second = store.get_or_create(first.id)

    assert second is not first
    assert second.cart.is_empty()


def test_checkout_flow_shares_the_session_cart() -> None:
    store = InMemoryShopperSessionStore(ttl_seconds=60)

    session = store.get_or_create(None)
    session.cart.add(make_dish("a"))

    assert session.checkout.cart is session.cart


def test_concurrent_lookups_evict_without_errors() -> None:
    store = InMemoryShopperSessionStore(ttl_seconds=0)
    errors: list[Exception] = []

    def lookup_many() -> None:
        for _ in range(2000):
            try:
                store.get_or_create(None)
            except Exception as exc:
                errors.append(exc)

    threads = [threading.Thread(target=lookup_many) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
