"""Supabase implementation for dish records."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from home_kitchen.domain.menu import Dish
from home_kitchen.services.menu_admin import DishRepository


@dataclass
class SupabaseDishRepository(DishRepository):
    """Supabase-backed repository for the dish table."""

    client: Client
    table: str = "dishes"

    def list_dishes(self) -> list[Dish]:
        """Return every dish record."""
        response = self.client.table(self.table).select("*").execute()
        return [parse_dish_row(row) for row in response.data or []]

    def create_dish(self, payload: dict[str, object]) -> Dish:
        """Insert a dish record and return it."""
        response = self.client.table(self.table).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create dish")
        return parse_dish_row(response.data[0])

    def update_dish(self, dish_id: str, payload: dict[str, object]) -> None:
        """Patch fields of a dish record."""
        response = (
            self.client.table(self.table).update(payload).eq("id", dish_id).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update dish")

    def delete_dish(self, dish_id: str) -> None:
        """Delete a dish record."""
        self.client.table(self.table).delete().eq("id", dish_id).execute()


def parse_dish_row(row: dict[str, object]) -> Dish:
    """Parse a dish row into a domain model."""
    created_raw = row.get("createdAt")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return Dish(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        description=str(row.get("description", "")),
        price=float(row.get("price") or 0.0),
        category=str(row.get("category", "")),
        image_url=str(row.get("imageURL") or ""),
        is_available=bool(row.get("isAvailable", False)),
        created_at=created_at,
    )
