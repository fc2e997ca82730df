from __future__ import annotations

from ..models import Category, CategoryRequest
from ..result import Result
from .resource import Attachment, ResourceClient, ResourcePayload


class CategoriesClient(ResourceClient[Category]):
    endpoint = "category"
    record_model = Category
    filters = frozenset({"keyword", "status"})
    multipart = frozenset({"create", "update"})
    update_id_field = "Id"
    resource_name = "category"

    def create_category(self, request: CategoryRequest, *, attachment: Attachment | None = None) -> Result[Category]:
        return self.create(ResourcePayload.from_model(request, {"Attachment": attachment} if attachment else None))

    def update_category(
        self,
        category_id: str,
        request: CategoryRequest,
        *,
        attachment: Attachment | None = None,
    ) -> Result[Category]:
        return self.update(
            category_id,
            ResourcePayload.from_model(request, {"Attachment": attachment} if attachment else None),
        )
