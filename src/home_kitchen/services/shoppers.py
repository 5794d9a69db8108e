"""Per-browser shopper sessions holding a cart and its checkout flow."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import uuid4

from home_kitchen.domain.cart import Cart
from home_kitchen.domain.checkout import CheckoutFlow


@dataclass
class ShopperSession:
    """Session-scoped cart state. Nothing here is persisted."""

    id: str
    cart: Cart = field(default_factory=Cart)
    checkout: CheckoutFlow = field(init=False)

    def __post_init__(self) -> None:
        self.checkout = CheckoutFlow(self.cart)


class ShopperSessionStore(Protocol):
    """Lookup interface for shopper sessions."""

    def get_or_create(self, session_id: str | None) -> ShopperSession:
        """Return the live session for an id, creating a fresh one if needed."""


@dataclass
class _SessionEntry:
    session: ShopperSession
    expires_at: datetime


@dataclass
class InMemoryShopperSessionStore(ShopperSessionStore):
    """In-memory session store with an idle TTL."""

    ttl_seconds: int
    _entries: dict[str, _SessionEntry] = field(default_factory=dict)

    def get_or_create(self, session_id: str | None) -> ShopperSession:
        """Return a live session, sliding its expiry forward."""
        now = datetime.now(tz=UTC)
        self._evict_expired(now)
        entry = self._entries.get(session_id) if session_id else None
        if entry is None:
            session = ShopperSession(id=uuid4().hex)
            entry = _SessionEntry(session=session, expires_at=now)
            self._entries[session.id] = entry
        entry.expires_at = now + timedelta(seconds=self.ttl_seconds)
        return entry.session

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_expired(self, now: datetime) -> None:
        expired = [
            key
            for key, entry in list(self._entries.items())
            if now >= entry.expires_at
        ]
        for key in expired:
            self._entries.pop(key, None)
