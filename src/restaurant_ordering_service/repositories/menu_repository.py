"""MongoDB repository for menu items.

Expected misses come back as None/False; driver errors (PyMongoError) are not
caught here and surface as 500 responses from the API layer.
"""

import logging
from collections.abc import Iterable
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.database import Database

from restaurant_ordering_service.models.menu_models import MenuItem

logger = logging.getLogger(__name__)

MENU_ITEMS_COLLECTION = "menuItems"


class MenuItemRepository:
    """Repository for menu item CRUD operations."""

    def __init__(self, database: Database, collection_name: str = MENU_ITEMS_COLLECTION) -> None:
        """Initialize repository.

        Args:
            database: PyMongo database handle
            collection_name: Name of the menu items collection
        """
        self.collection_name = collection_name
        self.collection = database[collection_name]

    def count(self) -> int:
        """Return the number of stored menu items."""
        return self.collection.count_documents({})

    def insert_many(self, documents: list[dict[str, Any]]) -> int:
        """Insert several menu item documents.

        Args:
            documents: Documents to insert

        Returns:
            int: Number of inserted documents
        """
        result = self.collection.insert_many(documents)
        return len(result.inserted_ids)

    def list_items(self, include_inactive: bool = False) -> list[MenuItem]:
        """List menu items ordered by category, then creation time.

        Args:
            include_inactive: Whether to include items with isActive = false

        Returns:
            list: MenuItem objects (empty list if none found)
        """
        query: dict[str, Any] = {} if include_inactive else {"isActive": True}
        cursor = self.collection.find(query).sort([("categoryId", ASCENDING), ("createdAt", ASCENDING)])
        return [MenuItem.from_document(document) for document in cursor]

    def get_item(self, item_id: ObjectId) -> MenuItem | None:
        """Retrieve a menu item by id.

        Args:
            item_id: Document id

        Returns:
            MenuItem if found, None otherwise
        """
        document = self.collection.find_one({"_id": item_id})
        if document is None:
            return None
        return MenuItem.from_document(document)

    def insert_item(self, document: dict[str, Any]) -> MenuItem:
        """Insert a new menu item document.

        Args:
            document: Document to insert (without ``_id``)

        Returns:
            MenuItem: The stored item including its generated id
        """
        result = self.collection.insert_one(document)
        return MenuItem.from_document({**document, "_id": result.inserted_id})

    def update_item(self, item_id: ObjectId, fields: dict[str, Any]) -> bool:
        """Apply a partial update to a menu item.

        Args:
            item_id: Document id
            fields: Fields to ``$set``

        Returns:
            bool: True if a document matched, False otherwise
        """
        result = self.collection.update_one({"_id": item_id}, {"$set": fields})
        return result.matched_count > 0

    def delete_item(self, item_id: ObjectId | str) -> bool:
        """Delete a menu item by its exact ``_id`` value.

        Args:
            item_id: Document id in the form it is stored

        Returns:
            bool: True if a document was deleted, False otherwise
        """
        result = self.collection.delete_one({"_id": item_id})
        return result.deleted_count > 0

    def find_active_by_ids(self, item_ids: Iterable[ObjectId]) -> list[MenuItem]:
        """Fetch the currently active menu items among the given ids.

        Args:
            item_ids: Document ids to resolve

        Returns:
            list: Active MenuItem objects; missing or inactive ids are absent
        """
        cursor = self.collection.find({"_id": {"$in": list(item_ids)}, "isActive": True})
        return [MenuItem.from_document(document) for document in cursor]

    def seed_if_empty(self, documents: list[dict[str, Any]]) -> int:
        """Insert seed documents when the collection has no items yet.

        Args:
            documents: Seed documents

        Returns:
            int: Number of inserted documents (0 if the collection was not empty)
        """
        if self.count() > 0:
            return 0
        inserted = self.insert_many(documents)
        logger.info(f"Seeded {inserted} menu items into '{self.collection_name}'")
        return inserted

