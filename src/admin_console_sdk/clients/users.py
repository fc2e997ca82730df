from __future__ import annotations

from ..models import CreateUserRequest, PaginatedQuery, PaginatedResult, User
from ..result import Result
from .resource import ResourceClient


class UsersClient(ResourceClient[User]):
    endpoint = "admin/users"
    create_path = "admin/mod"
    payload_wrapper = "data"
    record_model = User
    filters = frozenset({"keyword", "status", "role"})
    # The admin API exposes listing and creation only.
    operations = frozenset({"list", "create"})
    resource_name = "user"

    def list_users(
        self,
        page_index: int = 1,
        page_size: int = 10,
        *,
        keyword: str | None = None,
        status: str | None = None,
        role: str | None = None,
    ) -> Result[PaginatedResult[User]]:
        query = PaginatedQuery(page_index=page_index, page_size=page_size, keyword=keyword, status=status, role=role)
        return self.list(query)

    def create_user(self, request: CreateUserRequest) -> Result[User]:
        return self.create(request)
