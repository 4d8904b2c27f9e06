"""MongoDB repository for orders. Orders are insert-only."""

import logging
from typing import Any

from pymongo import DESCENDING
from pymongo.database import Database

from restaurant_ordering_service.models.order_models import Order

logger = logging.getLogger(__name__)

ORDERS_COLLECTION = "orders"


class OrderRepository:
    """Repository for persisting and listing orders."""

    def __init__(self, database: Database, collection_name: str = ORDERS_COLLECTION) -> None:
        """Initialize repository.

        Args:
            database: PyMongo database handle
            collection_name: Name of the orders collection
        """
        self.collection_name = collection_name
        self.collection = database[collection_name]

    def insert_order(self, document: dict[str, Any]) -> str:
        """Persist an order snapshot.

        Args:
            document: Order document (without ``_id``)

        Returns:
            str: The generated order id
        """
        result = self.collection.insert_one(document)
        return str(result.inserted_id)

    def list_recent(self, limit: int = 50) -> list[Order]:
        """List the most recent orders, newest first.

        Args:
            limit: Maximum number of orders to return

        Returns:
            list: Order objects (empty list if none found)
        """
        cursor = self.collection.find().sort("createdAt", DESCENDING).limit(limit)
        return [Order.from_document(document) for document in cursor]
