from __future__ import annotations

from ..exceptions import ApiError
from ..models import Order, OrderStatus
from ..result import Result
from .resource import ResourceClient, ResourcePayload, invalid_argument


class OrdersClient(ResourceClient[Order]):
    """Orders are read-only apart from status transitions."""

    endpoint = "order"
    record_model = Order
    filters = frozenset({"keyword", "status"})
    operations = frozenset({"list", "get"})
    resource_name = "order"

    def update_status(self, order_id: str, status: OrderStatus | str) -> Result[Order]:
        try:
            value = OrderStatus(status).value
        except ValueError:
            return self._failure("update", invalid_argument(f"Unknown order status {status!r}"))
        try:
            path = f"{self._item_path(order_id)}/status"
        except ApiError as exc:
            return self._failure("update", exc)
        return self._mutate("PUT", path, ResourcePayload(fields={"status": value}), "update", "Failed to update order status")
