import logging

from .auth_store import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from .clients import (
    Attachment,
    AuthGateway,
    CategoriesClient,
    DevicesClient,
    OrdersClient,
    PlantsClient,
    ProductsClient,
    ResourceClient,
    ResourcePayload,
    TargetValuesClient,
    TicketsClient,
    UsersClient,
)
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    ConflictError,
    FeatureNotImplementedError,
    ForbiddenError,
    MalformedResponseError,
    NetworkUnavailableError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    ValidationFailedError,
)
from .http_client import HttpClient
from .models import (
    Category,
    CategoryRequest,
    CreateUserRequest,
    Device,
    DeviceRequest,
    Order,
    OrderStatus,
    PaginatedQuery,
    PaginatedResult,
    Plant,
    PlantRequest,
    Product,
    ProductRequest,
    Session,
    TargetValue,
    TargetValueRequest,
    Ticket,
    TicketRequest,
    User,
)
from .result import Result
from .session import ApiSession
from .session_store import SessionStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ApiError",
    "ApiSession",
    "Attachment",
    "AuthGateway",
    "CategoriesClient",
    "Category",
    "CategoryRequest",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "CreateUserRequest",
    "Device",
    "DeviceRequest",
    "DevicesClient",
    "FeatureNotImplementedError",
    "FileKeyValueStore",
    "ForbiddenError",
    "HttpClient",
    "KeyValueStore",
    "MalformedResponseError",
    "MemoryKeyValueStore",
    "NetworkUnavailableError",
    "NotFoundError",
    "Order",
    "OrderStatus",
    "OrdersClient",
    "PaginatedQuery",
    "PaginatedResult",
    "Plant",
    "PlantRequest",
    "PlantsClient",
    "Product",
    "ProductRequest",
    "ProductsClient",
    "RateLimitError",
    "ResourceClient",
    "ResourcePayload",
    "Result",
    "ServerError",
    "Session",
    "SessionStore",
    "TargetValue",
    "TargetValueRequest",
    "TargetValuesClient",
    "Ticket",
    "TicketRequest",
    "TicketsClient",
    "UnauthorizedError",
    "User",
    "UsersClient",
    "ValidationFailedError",
    "load_config",
]
