from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar

from .auth_store import FileKeyValueStore, KeyValueStore
from .clients.auth import AuthGateway
from .clients.categories import CategoriesClient
from .clients.devices import DevicesClient
from .clients.orders import OrdersClient
from .clients.plants import PlantsClient
from .clients.products import ProductsClient
from .clients.resource import ResourceClient
from .clients.target_values import TargetValuesClient
from .clients.tickets import TicketsClient
from .clients.users import UsersClient
from .config import ClientConfig
from .http_client import HttpClient
from .session_store import SessionStore

ClientT = TypeVar("ClientT", bound=ResourceClient)

RESOURCE_CLIENTS: dict[str, type[ResourceClient]] = {
    "users": UsersClient,
    "products": ProductsClient,
    "categories": CategoriesClient,
    "devices": DevicesClient,
    "plants": PlantsClient,
    "orders": OrdersClient,
    "tickets": TicketsClient,
    "target-values": TargetValuesClient,
}


@dataclass
class ApiSession:
    """Wires config, transport, session store and clients for one process.

    The stored session is restored on construction without contacting the
    server.
    """

    config: ClientConfig
    store: KeyValueStore | None = None
    http: HttpClient | None = None
    session_store: SessionStore = field(init=False)

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = FileKeyValueStore(directory=self.config.session_dir)
        self.http = self.http or HttpClient(config=self.config)
        self.session_store = SessionStore(self.store)
        self.session_store.load()

    def auth_gateway(self) -> AuthGateway:
        assert self.http is not None
        return AuthGateway(
            http=self.http,
            session_store=self.session_store,
            notify_server_on_logout=self.config.notify_server_on_logout,
        )

    def resource_client(self, client_cls: type[ClientT]) -> ClientT:
        assert self.http is not None
        return client_cls(http=self.http, session_store=self.session_store)

    def resource(self, name: str) -> ResourceClient:
        try:
            client_cls = RESOURCE_CLIENTS[name]
        except KeyError as exc:
            raise ValueError(f"Unknown resource {name!r}; expected one of {', '.join(sorted(RESOURCE_CLIENTS))}") from exc
        return self.resource_client(client_cls)

    def users_client(self) -> UsersClient:
        return self.resource_client(UsersClient)

    def products_client(self) -> ProductsClient:
        return self.resource_client(ProductsClient)

    def categories_client(self) -> CategoriesClient:
        return self.resource_client(CategoriesClient)

    def devices_client(self) -> DevicesClient:
        return self.resource_client(DevicesClient)

    def plants_client(self) -> PlantsClient:
        return self.resource_client(PlantsClient)

    def orders_client(self) -> OrdersClient:
        return self.resource_client(OrdersClient)

    def tickets_client(self) -> TicketsClient:
        return self.resource_client(TicketsClient)

    def target_values_client(self) -> TargetValuesClient:
        return self.resource_client(TargetValuesClient)
