from __future__ import annotations

from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel, to_pascal


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, alias_generator=to_camel)


class ResourceRecord(WireModel):
    id: str


class AuthToken(WireModel):
    token: str = Field(min_length=1)


class User(ResourceRecord):
    name: str | None = None
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    status: str | None = None
    attachment: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.full_name or self.email or self.id


class AuthenticatedUser(User):
    auth: AuthToken

    def profile(self) -> User:
        return User.model_validate(self.model_dump(by_alias=True, exclude={"auth"}))


class Session(BaseModel):
    """The (token, user) pair. Both are set or both are absent."""

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = Field(default=None, min_length=1)
    user: Optional[User] = None

    @model_validator(mode="after")
    def _token_and_user_together(self) -> "Session":
        if (self.token is None) != (self.user is None):
            raise ValueError("token and user must be set together")
        return self

    @classmethod
    def empty(cls) -> "Session":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class PaginatedQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page_index: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    keyword: str | None = None
    status: str | None = None
    role: str | None = None
    type: str | None = None

    def active_filters(self) -> dict[str, str]:
        filters = {"keyword": self.keyword, "status": self.status, "role": self.role, "type": self.type}
        return {key: value.strip() for key, value in filters.items() if value is not None and value.strip()}

    def to_params(self) -> dict[str, str]:
        return {
            "pageIndex": str(self.page_index),
            "pageSize": str(self.page_size),
            **self.active_filters(),
        }


RecordT = TypeVar("RecordT", bound=ResourceRecord)


class PaginatedResult(WireModel, Generic[RecordT]):
    data: List[RecordT] = Field(default_factory=list)
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    last_page: bool

    def invariant_violations(self) -> list[str]:
        problems: list[str] = []
        if len(self.data) > self.page_size:
            problems.append(f"page holds {len(self.data)} items but pageSize is {self.page_size}")
        if self.total_items > 0:
            if self.current_page > self.total_pages:
                problems.append(f"currentPage {self.current_page} exceeds totalPages {self.total_pages}")
            if self.last_page != (self.current_page == self.total_pages):
                problems.append("lastPage disagrees with currentPage/totalPages")
            if not self.last_page and len(self.data) != self.page_size:
                problems.append(f"non-final page holds {len(self.data)} items, expected {self.page_size}")
        return problems


class Product(ResourceRecord):
    name: str | None = None
    main_image: str | None = None
    category_id: str | None = None
    category_name: str | None = None
    price: float | None = None
    status: str | None = None
    description: str | None = None
    amount: int | None = None
    images: List[str] = Field(default_factory=list)


class Category(ResourceRecord):
    name: str | None = None
    description: str | None = None
    parent_category_id: str | None = None
    attachment: str | None = None
    status: str | None = None
    children: List["Category"] = Field(default_factory=list)


class Device(ResourceRecord):
    name: str | None = None
    description: str | None = None
    attachment: str | None = None
    price: float | None = None
    quantity: int | None = None


class PlantTargetValue(WireModel):
    type: str
    min_value: float | None = None
    max_value: float | None = None


class Plant(ResourceRecord):
    name: str | None = None
    status: str | None = None
    target_values: List[PlantTargetValue] = Field(default_factory=list)


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str
    email: str
    phone: str
    role: str


class ProductRequest(BaseModel):
    """Form fields for product create/update; images travel as attachments."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_pascal)

    name: str
    category_id: str
    description: str | None = None
    amount: int | None = None
    price: float | None = None
    status: str = "Active"
    old_images: List[str] = Field(default_factory=list)


class CategoryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_pascal)

    name: str
    description: str | None = None
    status: str = "Active"
    parent_category_id: str | None = None


class DeviceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str | None = None
    description: str | None = None
    price: float | None = None
    quantity: int | None = None


class PlantRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    name: str
    status: str = "Active"


class OrderStatus(str, Enum):
    SUCCESS = "Success"
    PENDING = "Pending"
    PENDING_PAYMENT = "PendingPayment"
    DELIVERING = "Delivering"
    ALLOW_REPAYMENT = "AllowRepayment"
    CANCELLED = "Cancelled"
    IS_WAITING = "IsWaiting"


class OrderItem(WireModel):
    order_details_id: str | None = None
    product_name: str | None = None
    product_image: str | None = None
    price: float | None = None
    quantity: int | None = None
    total_price: float | None = None


class OrderAddress(WireModel):
    address_id: str | None = None
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    status: str | None = None
    longitude: str | None = None
    latitude: str | None = None


class OrderTransaction(WireModel):
    transaction_id: str | None = None
    payment_method: str | None = None
    payment_status: str | None = None
    created_at: str | None = None


class Order(ResourceRecord):
    """Order summary from listings, or full details from ``order/{id}``.

    The details body names its key ``orderId``; both spellings fill ``id``.
    """

    id: str = Field(validation_alias=AliasChoices("id", "orderId"))
    user_id: str | None = None
    full_name: str | None = None
    user_address_id: str | None = None
    price: float | None = None
    shipping_fee: float | None = None
    total_price: float | None = None
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    order_details_items: List[OrderItem] = Field(default_factory=list)
    user_address: OrderAddress | None = None
    transactions: List[OrderTransaction] = Field(default_factory=list)


class Ticket(ResourceRecord):
    user_full_name: str | None = None
    brief_description: str | None = None
    description: str | None = None
    type: str | None = None
    status: str | None = None
    created_by: str | None = None
    handled_by: str | None = None
    is_processed: bool | None = None
    created_at: str | None = None
    device_item_id: str | None = None
    attachments: List[str] = Field(default_factory=list)
    ticket_responses: List[Any] = Field(default_factory=list)


class TicketRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    brief_description: str | None = None
    description: str | None = None
    type: str | None = None
    device_item_id: str | None = None


class TargetValue(ResourceRecord):
    type: str | None = None
    min_value: float | None = None
    max_value: float | None = None


class TargetValueRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    type: str
    min_value: float
    max_value: float
