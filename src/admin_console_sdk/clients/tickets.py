from __future__ import annotations

from typing import Any, Mapping

from ..models import Ticket, TicketRequest
from ..result import Result
from .resource import ResourceClient


class TicketsClient(ResourceClient[Ticket]):
    endpoint = "ticket"
    record_model = Ticket
    filters = frozenset({"keyword", "type", "status"})
    resource_name = "ticket"

    def create_ticket(self, request: TicketRequest) -> Result[Ticket]:
        return self.create(request)

    def update_ticket(self, ticket_id: str, request: TicketRequest) -> Result[Ticket]:
        return self.update(ticket_id, request)

    def _normalize_page(self, content: Any) -> Any:
        # Ticket pages report pageIndex/total instead of currentPage/totalItems.
        if not isinstance(content, Mapping) or "totalItems" in content:
            return content
        page = dict(content)
        page.setdefault("currentPage", page.get("pageIndex"))
        page.setdefault("totalItems", page.get("total"))
        current, pages = page.get("currentPage"), page.get("totalPages")
        if "lastPage" not in page and isinstance(current, int) and isinstance(pages, int):
            page["lastPage"] = current >= pages
        return page

    def _send_delete(self, record_id: str, fallback: str) -> Any:
        return self._request(
            "POST",
            f"{self._item_path(record_id)}/delete",
            operation="ticket.delete",
            fallback_message=fallback,
        )
