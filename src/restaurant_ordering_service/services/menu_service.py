"""Service for the menu catalog and the menu admin operations."""

import logging
from datetime import UTC, datetime

from bson import ObjectId

from restaurant_ordering_service.errors import NotFoundError, ValidationError
from restaurant_ordering_service.models.menu_models import (
    CATEGORIES,
    SEED_MENU_ITEMS,
    Category,
    MenuItem,
    MenuItemInput,
    MenuItemUpdate,
    new_menu_item_document,
)
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.observability.metrics import record_menu_item_change
from restaurant_ordering_service.repositories.legacy_id_compat import delete_legacy_menu_item
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.services.ids import parse_object_id

logger = logging.getLogger(__name__)


class MenuService:
    """Service owning every mutation of menu items.

    Validation of payload shape happens in the request schemas
    (MenuItemInput / MenuItemUpdate) before any method here runs; this layer
    resolves ids, applies timestamps and maps misses onto NotFoundError.
    """

    def __init__(self, menu_repository: MenuItemRepository) -> None:
        """Initialize the MenuService.

        Args:
            menu_repository: Repository for the menuItems collection
        """
        self.menu_repository = menu_repository

    def list_categories(self) -> list[Category]:
        """Return the fixed category list in display order."""
        return list(CATEGORIES)

    async def ensure_seeded(self) -> int:
        """Populate the menu from the built-in seed list if it is empty.

        Returns:
            Number of inserted items (0 when the menu already had items)
        """
        now = datetime.now(UTC)
        documents = [new_menu_item_document(item, now) for item in SEED_MENU_ITEMS]
        return self.menu_repository.seed_if_empty(documents)

    @traced("menu.list", component="menu")
    async def list_menu_items(self, include_inactive: bool = False) -> list[MenuItem]:
        """List menu items, seeding the collection on first use.

        Args:
            include_inactive: Whether to include deactivated items

        Returns:
            Menu items sorted by category, then creation time
        """
        await self.ensure_seeded()
        return self.menu_repository.list_items(include_inactive=include_inactive)

    @traced("menu.create", component="menu")
    async def create_menu_item(self, payload: MenuItemInput) -> MenuItem:
        """Create a menu item.

        Args:
            payload: Validated creation payload

        Returns:
            The persisted item with generated id and timestamps
        """
        item = self.menu_repository.insert_item(new_menu_item_document(payload, datetime.now(UTC)))
        record_menu_item_change("create")
        logger.info(f"Created menu item {item.id} ({item.name}) in category {item.category_id}")
        return item

    async def get_menu_item(self, item_id: str) -> MenuItem:
        """Get a single menu item.

        Args:
            item_id: Identifier from the request path

        Returns:
            The stored menu item

        Raises:
            ValidationError: If the id is malformed
            NotFoundError: If no item has this id
        """
        item = self.menu_repository.get_item(parse_object_id(item_id, "menu item"))
        if item is None:
            raise NotFoundError("Menu item not found")
        return item

    @traced("menu.update", component="menu")
    async def update_menu_item(self, item_id: str, payload: MenuItemUpdate) -> MenuItem:
        """Apply a partial update; ``updatedAt`` is refreshed on every call.

        Args:
            item_id: Identifier from the request path
            payload: Validated partial payload

        Returns:
            The item as stored after the update

        Raises:
            ValidationError: If the id is malformed
            NotFoundError: If no item has this id
        """
        object_id = parse_object_id(item_id, "menu item")
        fields = payload.to_update_fields()
        fields["updatedAt"] = datetime.now(UTC)

        if not self.menu_repository.update_item(object_id, fields):
            raise NotFoundError("Menu item not found")

        item = self.menu_repository.get_item(object_id)
        if item is None:
            # Deleted between the update and the re-read
            raise NotFoundError("Menu item not found")

        record_menu_item_change("update")
        logger.info(f"Updated menu item {item_id}: {sorted(fields)}")
        return item

    @traced("menu.delete", component="menu")
    async def delete_menu_item(self, item_id: str) -> None:
        """Delete a menu item, falling back to legacy string ids.

        Args:
            item_id: Identifier from the request path

        Raises:
            ValidationError: If the id is empty
            NotFoundError: If neither id form matches a stored item
        """
        raw_id = item_id.strip()
        if not raw_id:
            raise ValidationError("Invalid menu item id")

        deleted = ObjectId.is_valid(raw_id) and self.menu_repository.delete_item(ObjectId(raw_id))
        if not deleted:
            deleted = delete_legacy_menu_item(self.menu_repository, raw_id)
        if not deleted:
            raise NotFoundError("Menu item not found")

        record_menu_item_change("delete")
        logger.info(f"Deleted menu item {raw_id}")
