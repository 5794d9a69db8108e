"""Tests for the live menu cache."""

import asyncio

from home_kitchen.domain.menu import Dish
from home_kitchen.services.menu_cache import MenuCache
from tests.conftest import FakeMenuFeed, make_dish


def test_start_subscribes_once_and_applies_initial_snapshot() -> None:
    feed = FakeMenuFeed(initial=[make_dish("a")])
    cache = MenuCache(feed=feed)

    asyncio.run(cache.start())
    asyncio.run(cache.start())

    assert feed.subscribe_calls == 1
    assert [dish.id for dish in cache.current()] == ["a"]
    assert cache.version == 1


def test_each_snapshot_replaces_the_whole_collection() -> None:
    feed = FakeMenuFeed()
    cache = MenuCache(feed=feed)
    asyncio.run(cache.start())

    feed.push([make_dish("a"), make_dish("b")])
    feed.push([make_dish("c", name="Узвар")])

    assert [dish.id for dish in cache.current()] == ["c"]
    assert cache.current()[0].name == "Узвар"
    assert cache.version == 2


def test_stop_unsubscribes_exactly_once() -> None:
    feed = FakeMenuFeed()
    cache = MenuCache(feed=feed)
    asyncio.run(cache.start())

    asyncio.run(cache.stop())
    asyncio.run(cache.stop())

    assert feed.unsubscribe_calls == 1


def test_stop_before_start_is_noop() -> None:
    feed = FakeMenuFeed()
    cache = MenuCache(feed=feed)

    asyncio.run(cache.stop())

    assert feed.unsubscribe_calls == 0


def test_error_marks_cache_stale_and_keeps_last_snapshot() -> None:
    feed = FakeMenuFeed(initial=[make_dish("a")])
    cache = MenuCache(feed=feed)
    asyncio.run(cache.start())

    feed.fail(ConnectionError("socket closed"))

    assert cache.is_stale
    assert [dish.id for dish in cache.current()] == ["a"]

    feed.push([make_dish("b")])
    assert not cache.is_stale


def test_listeners_receive_snapshots_until_removed() -> None:
    feed = FakeMenuFeed()
    cache = MenuCache(feed=feed)
    asyncio.run(cache.start())
    received: list[list[Dish]] = []

    remove = cache.subscribe(received.append)
    feed.push([make_dish("a")])
    remove()
    feed.push([make_dish("b")])

    assert [[dish.id for dish in snapshot] for snapshot in received] == [["a"]]


def test_visible_filters_availability_and_category() -> None:
    feed = FakeMenuFeed(
        initial=[
            make_dish("borshch", category="Основні"),
            make_dish("uzvar", category="Напої"),
            make_dish("kvas", category="Напої", is_available=False),
        ]
    )
    cache = MenuCache(feed=feed)
    asyncio.run(cache.start())

    assert [dish.id for dish in cache.visible()] == ["borshch", "uzvar"]
    assert [dish.id for dish in cache.visible("Усі")] == ["borshch", "uzvar"]
    assert [dish.id for dish in cache.visible("Напої")] == ["uzvar"]
    assert cache.find("kvas") is not None
    assert cache.find("missing") is None
