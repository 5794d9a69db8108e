"""Domain models for the dish menu."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class Category(StrEnum):
    """Fixed set of menu sections."""

    MAINS = "Основні"
    STARTERS = "Закуски"
    DRINKS = "Напої"
    DESSERTS = "Десерти"


ALL_CATEGORIES = "Усі"


@dataclass(frozen=True)
class Dish:
    """A sellable menu item owned by the remote dish store."""

    id: str
    name: str
    description: str
    price: float
    category: str
    image_url: str
    is_available: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class DishDraft:
    """Admin-entered fields for a dish that does not exist yet."""

    name: str
    description: str
    price: float
    category: Category


@dataclass(frozen=True)
class ImageUpload:
    """A dish photo selected for upload."""

    filename: str
    content_type: str
    data: bytes

    @property
    def is_empty(self) -> bool:
        return not self.data


def filter_dishes(dishes: tuple[Dish, ...], category: str | None) -> list[Dish]:
    """Return available dishes, optionally limited to one category."""
    return [
        dish
        for dish in dishes
        if dish.is_available
        and (not category or category == ALL_CATEGORIES or dish.category == category)
    ]


def format_price(price: float) -> str:
    """Format a price in hryvnias the way the storefront shows it."""
    if float(price).is_integer():
        return f"{int(price)} ₴"
    return f"{price:.2f} ₴"
