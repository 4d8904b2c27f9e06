"""Service for order intake and order history.

Checkout is all-or-nothing: the cart is normalized, duplicate dishes are merged,
every distinct dish must resolve to a currently active menu item, and only then
is the order priced from the stored menu prices and persisted. Prices sent by
the client are never read.

There is no transaction around resolve-then-insert; a price change landing in
between is not detected.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId

from restaurant_ordering_service.errors import ValidationError
from restaurant_ordering_service.models.order_models import (
    Order,
    OrderCreateRequest,
    OrderLineItem,
    OrderReceipt,
    new_order_document,
)
from restaurant_ordering_service.observability import traced
from restaurant_ordering_service.observability.metrics import (
    record_order_placed,
    record_order_rejected,
)
from restaurant_ordering_service.repositories.menu_repository import MenuItemRepository
from restaurant_ordering_service.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)

ORDER_HISTORY_LIMIT = 50


@dataclass
class CartLine:
    """A cart entry that passed normalization.

    Attributes:
        menu_item_id: 24-hex-character dish id
        quantity: Positive number of portions
    """

    menu_item_id: str
    quantity: int


def _positive_int(value: Any) -> int | None:
    # JSON numbers like 2.0 are integers too; booleans are not.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, float) and value.is_integer() and value > 0:
        return int(value)
    return None


def normalize_cart(entries: list[Any]) -> list[CartLine]:
    """Keep the cart entries with a valid dish id and a positive integer quantity.

    Invalid entries are dropped silently.

    Args:
        entries: Raw ``items`` array from the request body

    Returns:
        list: Valid cart lines in request order
    """
    lines: list[CartLine] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        menu_item_id = str(entry.get("menuItemId"))
        quantity = _positive_int(entry.get("quantity"))
        if quantity is None or not ObjectId.is_valid(menu_item_id):
            continue
        # canonical lowercase form, so "ABC..." and "abc..." aggregate together
        lines.append(CartLine(menu_item_id=str(ObjectId(menu_item_id)), quantity=quantity))
    return lines


def aggregate_quantities(lines: list[CartLine]) -> dict[str, int]:
    """Merge repeated dishes into one entry per id by summing quantities.

    Args:
        lines: Normalized cart lines

    Returns:
        dict: Dish id -> total quantity, in first-seen order
    """
    quantities: dict[str, int] = {}
    for line in lines:
        quantities[line.menu_item_id] = quantities.get(line.menu_item_id, 0) + line.quantity
    return quantities


def normalize_note(note: Any) -> str:
    """Return the trimmed note, or an empty string if it is absent or not text."""
    if isinstance(note, str):
        return note.strip()
    return ""


class OrderService:
    """Service for placing orders and reading order history."""

    def __init__(
        self,
        menu_repository: MenuItemRepository,
        order_repository: OrderRepository,
    ) -> None:
        """Initialize the OrderService.

        Args:
            menu_repository: Repository used to resolve dish prices
            order_repository: Repository storing order snapshots
        """
        self.menu_repository = menu_repository
        self.order_repository = order_repository

    @traced("orders.place", component="orders")
    async def place_order(self, payload: OrderCreateRequest) -> OrderReceipt:
        """Validate a cart, price it from stored menu items and persist the order.

        Args:
            payload: Checkout request body

        Returns:
            OrderReceipt with the new order id, total and timestamp

        Raises:
            ValidationError: If the cart is empty, every entry is invalid, or any
                dish is missing or inactive
        """
        if not isinstance(payload.items, list) or not payload.items:
            record_order_rejected("empty_cart")
            raise ValidationError("Please select at least one dish")

        lines = normalize_cart(payload.items)
        if not lines:
            record_order_rejected("invalid_entries")
            raise ValidationError("Invalid dish parameters")

        quantities = aggregate_quantities(lines)

        menu_items = self.menu_repository.find_active_by_ids(
            [ObjectId(item_id) for item_id in quantities]
        )
        if len(menu_items) != len(quantities):
            record_order_rejected("inactive_item")
            logger.warning(
                f"Rejected order: {len(quantities) - len(menu_items)} of "
                f"{len(quantities)} dishes are missing or inactive"
            )
            raise ValidationError("Order contains dishes that do not exist or are unavailable")

        menu_by_id = {item.id: item for item in menu_items}
        line_items: list[OrderLineItem] = []
        total_price = 0.0
        for item_id, quantity in quantities.items():
            menu_item = menu_by_id[item_id]
            subtotal = menu_item.price * quantity
            total_price += subtotal
            line_items.append(
                OrderLineItem(
                    menu_item_id=item_id,
                    name=menu_item.name,
                    price=menu_item.price,
                    quantity=quantity,
                    subtotal=subtotal,
                    category_id=menu_item.category_id,
                )
            )

        now = datetime.now(UTC)
        order_id = self.order_repository.insert_order(
            new_order_document(line_items, total_price, normalize_note(payload.note), now)
        )

        record_order_placed(total_price, len(line_items))
        logger.info(f"Placed order {order_id} with {len(line_items)} dishes, total {total_price}")

        return OrderReceipt(id=order_id, total_price=total_price, created_at=now)

    async def list_recent_orders(self, limit: int = ORDER_HISTORY_LIMIT) -> list[Order]:
        """List the most recent orders, newest first.

        Args:
            limit: Maximum number of orders

        Returns:
            List of orders, empty list if none exist
        """
        return self.order_repository.list_recent(limit=limit)
