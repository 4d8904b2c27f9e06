"""Compatibility shim for menu items stored with a plain string ``_id``.

Early versions of the admin tool wrote menu items whose ``_id`` was the string
form of an id instead of an ObjectId. Only deletion still has to reach them;
every other lookup goes through ObjectId ids exclusively.
"""

# TODO: drop this module once a migration has rewritten every string _id in menuItems to ObjectId.

import logging

from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository

logger = logging.getLogger(__name__)


def delete_legacy_menu_item(repository: MenuItemRepository, raw_id: str) -> bool:
    """Delete a menu item whose ``_id`` was stored as a plain string.

    Args:
        repository: Menu item repository
        raw_id: Identifier exactly as received in the request path

    Returns:
        bool: True if a legacy document was deleted, False otherwise
    """
    deleted = repository.delete_item(raw_id)
    if deleted:
        logger.warning(f"Deleted menu item {raw_id} stored with a legacy string id")
    return deleted
