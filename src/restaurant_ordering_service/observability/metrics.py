"""Custom metrics for the ordering service."""

from opentelemetry import metrics

meter = metrics.get_meter("ordering-svc")

orders_placed_counter = meter.create_counter(
    name="orders_placed_total",
    description="Total number of orders persisted",
    unit="1",
)

orders_rejected_counter = meter.create_counter(
    name="orders_rejected_total",
    description="Total number of checkouts rejected during validation, by reason",
    unit="1",
)

order_total_histogram = meter.create_histogram(
    name="order_total_price",
    description="Total price of placed orders",
    unit="1",
)

image_uploads_counter = meter.create_counter(
    name="image_uploads_total",
    description="Image upload attempts by outcome",
    unit="1",
)

menu_item_changes_counter = meter.create_counter(
    name="menu_item_changes_total",
    description="Menu item mutations by operation",
    unit="1",
)


def record_order_placed(total_price: float, line_count: int) -> None:
    """Record a successfully placed order.

    Args:
        total_price: Computed order total
        line_count: Number of distinct line items
    """
    orders_placed_counter.add(1, {"line_count": line_count})
    order_total_histogram.record(total_price)


def record_order_rejected(reason: str) -> None:
    """Record a rejected checkout.

    Args:
        reason: Short machine-readable reason (e.g. "empty_cart", "inactive_item")
    """
    orders_rejected_counter.add(1, {"reason": reason})


def record_image_upload(outcome: str) -> None:
    """Record an upload attempt.

    Args:
        outcome: "stored" or the rejection reason
    """
    image_uploads_counter.add(1, {"outcome": outcome})


def record_menu_item_change(operation: str) -> None:
    """Record a menu item mutation.

    Args:
        operation: "create", "update" or "delete"
    """
    menu_item_changes_counter.add(1, {"operation": operation})
