"""Checkout state machine for a shopper's cart."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from home_kitchen.domain.cart import Cart, CartLine
from home_kitchen.domain.errors import (
    CheckoutStateError,
    CheckoutValidationError,
    EmptyCartError,
)


class CheckoutState(StrEnum):
    """Checkout steps. SUBMITTED is passed through on submit, never held."""

    BROWSING = "BROWSING"
    CHECKING_OUT = "CHECKING_OUT"
    SUBMITTED = "SUBMITTED"


@dataclass(frozen=True)
class ContactDetails:
    """Recipient contact fields entered at checkout."""

    name: str
    phone: str
    address: str

    def missing_fields(self) -> list[str]:
        """Return the names of blank fields."""
        return [
            field_name
            for field_name, value in (
                ("name", self.name),
                ("phone", self.phone),
                ("address", self.address),
            )
            if not value.strip()
        ]


@dataclass(frozen=True)
class OrderPayload:
    """Order handed to the intake collaborator."""

    contact: ContactDetails
    lines: tuple[CartLine, ...]
    total: float
    submitted_at: datetime

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.contact.name,
            "phone": self.contact.phone,
            "address": self.contact.address,
            "items": [
                {
                    "id": line.dish.id,
                    "name": line.dish.name,
                    "price": line.dish.price,
                    "category": line.dish.category,
                    "quantity": line.quantity,
                }
                for line in self.lines
            ],
            "total": self.total,
            "submitted_at": self.submitted_at.isoformat(),
        }


@dataclass
class CheckoutFlow:
    """Moves a cart from browsing through checkout and back."""

    cart: Cart
    state: CheckoutState = CheckoutState.BROWSING

    def begin(self) -> None:
        """Enter checkout from browsing."""
        if self.state is not CheckoutState.BROWSING:
            raise CheckoutStateError()
        if self.cart.is_empty():
            raise EmptyCartError()
        self.state = CheckoutState.CHECKING_OUT

    def cancel(self) -> None:
        """Return to browsing without touching the cart."""
        if self.state is not CheckoutState.CHECKING_OUT:
            raise CheckoutStateError()
        self.state = CheckoutState.BROWSING

    def submit(self, contact: ContactDetails) -> OrderPayload:
        """Validate contact fields, snapshot the order and reset the cart."""
        if self.state is not CheckoutState.CHECKING_OUT:
            raise CheckoutStateError()
        missing = contact.missing_fields()
        if missing:
            raise CheckoutValidationError(missing)
        if self.cart.is_empty():
            raise EmptyCartError()
        cleaned = ContactDetails(
            name=contact.name.strip(),
            phone=contact.phone.strip(),
            address=contact.address.strip(),
        )
        payload = OrderPayload(
            contact=cleaned,
            lines=tuple(self.cart.lines),
            total=self.cart.total(),
            submitted_at=datetime.now(tz=UTC),
        )
        self.state = CheckoutState.SUBMITTED
        self.cart.clear()
        self.state = CheckoutState.BROWSING
        return payload
