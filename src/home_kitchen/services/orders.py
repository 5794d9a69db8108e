"""Order intake and checkout handling."""

import logging
from dataclasses import dataclass
from typing import Protocol

from home_kitchen.domain.checkout import ContactDetails, OrderPayload
from home_kitchen.services.shoppers import ShopperSession

logger = logging.getLogger(__name__)

THANK_YOU_MESSAGE = (
    "Дякуємо! Ваше замовлення прийнято в обробку. "
    "Наш менеджер зв'яжеться з вами найближчим часом."
)


class OrderIntake(Protocol):
    """Receives submitted orders."""

    async def submit_order(self, payload: OrderPayload) -> None:
        """Hand an order over for fulfilment."""


@dataclass
class LoggingOrderIntake(OrderIntake):
    """Intake that only records the order in the application log."""

    async def submit_order(self, payload: OrderPayload) -> None:
        """Log the received order."""
        logger.info("ORDER RECEIVED", extra={"order": payload.as_dict()})


@dataclass
class CheckoutService:
    """Drives a shopper's checkout flow."""

    order_intake: OrderIntake

    def begin(self, shopper: ShopperSession) -> None:
        shopper.checkout.begin()

    def cancel(self, shopper: ShopperSession) -> None:
        shopper.checkout.cancel()

    def submit(self, shopper: ShopperSession, contact: ContactDetails) -> OrderPayload:
        """Finish checkout and return the payload to hand to the intake."""
        payload = shopper.checkout.submit(contact)
        logger.info(
            "Checkout submitted",
            extra={"shopper_id": shopper.id, "total": payload.total},
        )
        return payload

    async def dispatch(self, payload: OrderPayload) -> None:
        """Deliver an order to the intake without failing the shopper."""
        try:
            await self.order_intake.submit_order(payload)
        except Exception:
            logger.exception("Order intake failed", extra={"total": payload.total})
