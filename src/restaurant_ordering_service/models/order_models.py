"""Order models.

An order is an immutable snapshot taken at checkout: every line item keeps its
own copy of the dish name and price, so later menu edits never change past
orders.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OrderStatusEnum(str, Enum):
    """Enumeration of kitchen status values."""

    NEW = "new"
    COOKING = "cooking"
    DONE = "done"


class OrderCreateRequest(BaseModel):
    """Checkout payload.

    ``items`` is kept untyped here: a non-list is reported as an empty cart, and
    entries with a malformed dish id or a non-positive quantity are dropped by
    the order service instead of failing the whole request.
    """

    items: Any = Field(default_factory=list, description="Cart entries")
    note: Any = Field(None, description="Optional free-text note")


class OrderLineItem(BaseModel):
    """Resolved cart entry with denormalized dish data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    menu_item_id: str
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., gt=0)
    subtotal: float = Field(..., ge=0)
    category_id: str


class Order(BaseModel):
    """A persisted order as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    items: list[OrderLineItem]
    total_price: float = Field(..., ge=0)
    note: str = ""
    status: OrderStatusEnum = OrderStatusEnum.NEW
    created_at: datetime

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Order":
        """Create an Order from an ``orders`` document.

        Older documents may lack ``note`` or ``status``.

        Args:
            document: Raw MongoDB document

        Returns:
            Order: Parsed model instance
        """
        return cls(
            id=str(document["_id"]),
            items=[OrderLineItem.model_validate(item) for item in document.get("items", [])],
            total_price=document["totalPrice"],
            note=document.get("note") or "",
            status=OrderStatusEnum(document.get("status") or OrderStatusEnum.NEW.value),
            created_at=document["createdAt"],
        )


def new_order_document(
    items: list[OrderLineItem], total_price: float, note: str, now: datetime
) -> dict[str, Any]:
    """Build the document stored for a freshly placed order."""
    return {
        "items": [item.model_dump(by_alias=True) for item in items],
        "totalPrice": total_price,
        "note": note,
        "status": OrderStatusEnum.NEW.value,
        "createdAt": now,
    }


class OrderReceipt(BaseModel):
    """Summary returned after a successful checkout."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    total_price: float
    created_at: datetime
