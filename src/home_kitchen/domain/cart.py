"""Shopping cart domain model."""

from dataclasses import dataclass, field, replace

from home_kitchen.domain.menu import Dish


@dataclass(frozen=True)
class CartLine:
    """A dish snapshot paired with the requested quantity."""

    dish: Dish
    quantity: int = 1

    @property
    def dish_id(self) -> str:
        return self.dish.id

    @property
    def subtotal(self) -> float:
        return self.dish.price * self.quantity


@dataclass
class Cart:
    """Ordered cart lines keyed by dish id.

    Lines hold the dish fields as they were when added; later menu snapshots
    do not rewrite them.
    """

    lines: list[CartLine] = field(default_factory=list)

    def add(self, dish: Dish) -> CartLine:
        """Add one unit of a dish, merging with an existing line."""
        for index, line in enumerate(self.lines):
            if line.dish_id == dish.id:
                updated = replace(line, quantity=line.quantity + 1)
                self.lines[index] = updated
                return updated
        created = CartLine(dish=dish, quantity=1)
        self.lines.append(created)
        return created

    def update_quantity(self, dish_id: str, delta: int) -> CartLine | None:
        """Shift a line quantity by delta without going below one."""
        for index, line in enumerate(self.lines):
            if line.dish_id == dish_id:
                updated = replace(line, quantity=max(1, line.quantity + delta))
                self.lines[index] = updated
                return updated
        return None

    def remove(self, dish_id: str) -> None:
        """Drop the line for a dish if it is present."""
        self.lines = [line for line in self.lines if line.dish_id != dish_id]

    def clear(self) -> None:
        """Empty the cart."""
        self.lines = []

    def total(self) -> float:
        """Return the sum of price times quantity over all lines."""
        return sum((line.subtotal for line in self.lines), 0.0)

    def item_count(self) -> int:
        """Return the number of units across all lines."""
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines
