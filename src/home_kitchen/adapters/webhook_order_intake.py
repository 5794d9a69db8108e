"""Order intake that forwards orders to an HTTP webhook."""

from dataclasses import dataclass

import httpx

from home_kitchen.domain.checkout import OrderPayload
from home_kitchen.services.orders import OrderIntake


@dataclass
class HttpxWebhookOrderIntake(OrderIntake):
    """Posts each order as JSON to a configured URL."""

    url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str) -> "HttpxWebhookOrderIntake":
        """Create an intake with a managed httpx session."""
        return cls(url=url, http_client=httpx.AsyncClient())

    async def submit_order(self, payload: OrderPayload) -> None:
        """POST the order payload to the webhook."""
        response = await self.http_client.post(
            self.url, json=payload.as_dict(), timeout=10
        )
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()
