"""Pydantic models for storefront and admin payloads."""

from pydantic import BaseModel, Field

from home_kitchen.domain.cart import Cart
from home_kitchen.domain.checkout import CheckoutState
from home_kitchen.domain.menu import Category, Dish


class DishOut(BaseModel):
    """Dish as exposed to the browser."""

    id: str
    name: str
    description: str
    price: float
    category: str
    image_url: str
    is_available: bool

    @classmethod
    def from_dish(cls, dish: Dish) -> "DishOut":
        return cls(
            id=dish.id,
            name=dish.name,
            description=dish.description,
            price=dish.price,
            category=dish.category,
            image_url=dish.image_url,
            is_available=dish.is_available,
        )


class MenuOut(BaseModel):
    """Menu listing with cache freshness markers."""

    version: int
    stale: bool
    dishes: list[DishOut]


class CartLineOut(BaseModel):
    """Cart line payload."""

    dish: DishOut
    quantity: int
    subtotal: float


class CartOut(BaseModel):
    """Cart payload with derived totals."""

    lines: list[CartLineOut]
    total: float
    item_count: int
    checkout_state: CheckoutState

    @classmethod
    def from_cart(cls, cart: Cart, state: CheckoutState) -> "CartOut":
        return cls(
            lines=[
                CartLineOut(
                    dish=DishOut.from_dish(line.dish),
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in cart.lines
            ],
            total=cart.total(),
            item_count=cart.item_count(),
            checkout_state=state,
        )


class AddToCartIn(BaseModel):
    """Request to add one unit of a dish."""

    dish_id: str


class QuantityChangeIn(BaseModel):
    """Request to shift a line quantity."""

    delta: int


class CheckoutIn(BaseModel):
    """Contact fields entered on the checkout form."""

    name: str = ""
    phone: str = ""
    address: str = ""


class LoginIn(BaseModel):
    """Admin sign-in form."""

    email: str
    password: str


class ImageIn(BaseModel):
    """Dish photo encoded for a JSON body."""

    filename: str = Field(min_length=1)
    content_type: str = "application/octet-stream"
    data_base64: str


class DishCreateIn(BaseModel):
    """New dish form."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: Category = Category.MAINS
    image: ImageIn | None = None


class AvailabilityIn(BaseModel):
    """Availability as currently observed by the admin."""

    current: bool
