"""Local mirror of the remote dish collection."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

from home_kitchen.domain.menu import Dish, filter_dishes

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[list[Dish]], None]
ErrorCallback = Callable[[Exception], None]
Unsubscribe = Callable[[], Awaitable[None]]


class MenuFeed(Protocol):
    """Live subscription to the remote dish collection."""

    async def subscribe(
        self, on_snapshot: SnapshotCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        """Start delivering full snapshots and return the unsubscribe hook."""


@dataclass
class MenuCache:
    """Single-writer cache replaced wholesale by each delivered snapshot."""

    feed: MenuFeed
    _dishes: tuple[Dish, ...] = ()
    _listeners: list[SnapshotCallback] = field(default_factory=list)
    _unsubscribe: Unsubscribe | None = None
    _started: bool = False
    version: int = 0
    last_error: Exception | None = None

    async def start(self) -> None:
        """Subscribe to the feed once."""
        if self._started:
            return
        self._started = True
        self._unsubscribe = await self.feed.subscribe(
            self._apply_snapshot, self._record_error
        )

    async def stop(self) -> None:
        """Unsubscribe from the feed once."""
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is None:
            return
        await unsubscribe()

    def current(self) -> tuple[Dish, ...]:
        """Return the latest snapshot."""
        return self._dishes

    def visible(self, category: str | None = None) -> list[Dish]:
        """Return dishes a shopper can order, optionally for one category."""
        return filter_dishes(self._dishes, category)

    def find(self, dish_id: str) -> Dish | None:
        for dish in self._dishes:
            if dish.id == dish_id:
                return dish
        return None

    @property
    def is_stale(self) -> bool:
        return self.last_error is not None

    def subscribe(self, listener: SnapshotCallback) -> Callable[[], None]:
        """Register a listener for new snapshots and return its remover."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _apply_snapshot(self, dishes: list[Dish]) -> None:
        self._dishes = tuple(dishes)
        self.version += 1
        self.last_error = None
        for listener in list(self._listeners):
            listener(list(self._dishes))

    def _record_error(self, exc: Exception) -> None:
        logger.error(
            "Menu feed delivery failed",
            extra={"error": f"{type(exc).__name__}: {exc}", "version": self.version},
        )
        self.last_error = exc
