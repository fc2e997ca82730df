from .auth import AuthGateway
from .categories import CategoriesClient
from .devices import DevicesClient
from .orders import OrdersClient
from .plants import PlantsClient
from .products import ProductsClient
from .resource import Attachment, ResourceClient, ResourcePayload
from .target_values import TargetValuesClient
from .tickets import TicketsClient
from .users import UsersClient

__all__ = [
    "Attachment",
    "AuthGateway",
    "CategoriesClient",
    "DevicesClient",
    "OrdersClient",
    "PlantsClient",
    "ProductsClient",
    "ResourceClient",
    "ResourcePayload",
    "TargetValuesClient",
    "TicketsClient",
    "UsersClient",
]
