"""Live dish feed built on Supabase Realtime."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from supabase import AsyncClient, acreate_client

from home_kitchen.adapters.supabase_dish_repository import parse_dish_row
from home_kitchen.services.menu_cache import (
    ErrorCallback,
    MenuFeed,
    SnapshotCallback,
    Unsubscribe,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str], Awaitable[AsyncClient]]


@dataclass
class SupabaseRealtimeMenuFeed(MenuFeed):
    """Delivers the full dish table on subscribe and after every change.

    Postgres change events only signal that something moved; each one
    triggers a fresh read of the whole table, and reads are serialized so
    snapshots arrive in the order they were taken.
    """

    supabase_url: str
    supabase_key: str
    table: str = "dishes"
    client_factory: ClientFactory = acreate_client
    _pending: set[asyncio.Task[None]] = field(default_factory=set)

    async def subscribe(
        self, on_snapshot: SnapshotCallback, on_error: ErrorCallback
    ) -> Unsubscribe:
        """Open the realtime channel and push the initial snapshot."""
        client = await self.client_factory(self.supabase_url, self.supabase_key)
        lock = asyncio.Lock()

        async def publish() -> None:
            async with lock:
                try:
                    response = await client.table(self.table).select("*").execute()
                    dishes = [parse_dish_row(row) for row in response.data or []]
                except Exception as exc:
                    logger.exception(
                        "Failed to read dish snapshot", extra={"table": self.table}
                    )
                    on_error(exc)
                    return
                on_snapshot(dishes)

        def handle_change(payload: dict[str, object]) -> None:
            logger.debug("Dish change received", extra={"payload": payload})
            task = asyncio.get_running_loop().create_task(publish())
            self._pending.add(task)
            task.add_done_callback(self._reap)

        channel = client.channel(f"{self.table}-changes")
        channel.on_postgres_changes(
            "*", schema="public", table=self.table, callback=handle_change
        )
        await channel.subscribe()
        await publish()

        async def unsubscribe() -> None:
            pending = list(self._pending)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            await client.remove_all_channels()
            await client.postgrest.aclose()
            logger.info("Dish feed closed", extra={"table": self.table})

        return unsubscribe

    def _reap(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled() or task.exception() is None:
            return
        logger.error(
            "Dish snapshot delivery failed",
            exc_info=task.exception(),
            extra={"table": self.table},
        )
