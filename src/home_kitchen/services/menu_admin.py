"""Admin mutations against the remote dish store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from home_kitchen.domain.errors import DishWriteError, MissingImageError
from home_kitchen.domain.menu import Dish, DishDraft, ImageUpload

logger = logging.getLogger(__name__)

ConfirmationGate = Callable[[], bool]


class DishRepository(Protocol):
    """Persistence interface for dish records."""

    def list_dishes(self) -> list[Dish]:
        """Return every dish record."""

    def create_dish(self, payload: dict[str, object]) -> Dish:
        """Insert a dish record and return it with its assigned id."""

    def update_dish(self, dish_id: str, payload: dict[str, object]) -> None:
        """Patch the given fields of one dish record."""

    def delete_dish(self, dish_id: str) -> None:
        """Delete one dish record."""


class ImageStorage(Protocol):
    """Blob storage for dish photos."""

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes under a path and return the retrieval URL."""

    def remove(self, path: str) -> None:
        """Delete a stored object."""


@dataclass
class MenuAdminService:
    """Create, delete and toggle dishes.

    Nothing is applied to the local menu cache here; results arrive through
    the live subscription.
    """

    repository: DishRepository
    image_storage: ImageStorage
    clock: Callable[[], datetime] = lambda: datetime.now(tz=UTC)

    def create_dish(self, draft: DishDraft, image: ImageUpload | None) -> Dish:
        """Upload the photo, then write a new available dish pointing at it."""
        if image is None or image.is_empty:
            raise MissingImageError()
        now = self.clock()
        path = f"dishes/{int(now.timestamp() * 1000)}_{image.filename}"
        try:
            image_url = self.image_storage.upload(path, image.data, image.content_type)
        except Exception as exc:
            logger.exception("Dish photo upload failed", extra={"path": path})
            raise DishWriteError() from exc
        payload: dict[str, object] = {
            "name": draft.name,
            "description": draft.description,
            "price": draft.price,
            "category": str(draft.category),
            "imageURL": image_url,
            "isAvailable": True,
            "createdAt": now.isoformat(),
        }
        try:
            dish = self.repository.create_dish(payload)
        except Exception as exc:
            logger.exception("Dish record write failed", extra={"path": path})
            self._discard_upload(path)
            raise DishWriteError() from exc
        logger.info("Dish created", extra={"dish_id": dish.id})
        return dish

    def delete_dish(self, dish_id: str, confirm: ConfirmationGate) -> bool:
        """Delete a dish if the confirmation gate says yes."""
        if not confirm():
            return False
        try:
            self.repository.delete_dish(dish_id)
        except Exception as exc:
            logger.exception("Dish delete failed", extra={"dish_id": dish_id})
            raise DishWriteError("Помилка при видаленні страви") from exc
        logger.info("Dish deleted", extra={"dish_id": dish_id})
        return True

    def toggle_availability(self, dish_id: str, current: bool) -> bool:
        """Write the negation of the observed availability and return it."""
        updated = not current
        try:
            self.repository.update_dish(dish_id, {"isAvailable": updated})
        except Exception as exc:
            logger.exception(
                "Dish availability update failed", extra={"dish_id": dish_id}
            )
            raise DishWriteError("Помилка при оновленні наявності") from exc
        return updated

    def _discard_upload(self, path: str) -> None:
        try:
            self.image_storage.remove(path)
        except Exception:
            logger.exception(
                "Failed to remove orphaned dish photo", extra={"path": path}
            )
