from __future__ import annotations

from ..models import Product, ProductRequest
from ..result import Result
from .resource import Attachment, ResourceClient, ResourcePayload


def _product_payload(
    request: ProductRequest,
    main_image: Attachment | None,
    new_images: list[Attachment] | None,
) -> ResourcePayload:
    attachments: dict[str, Attachment | list[Attachment]] = {"NewImages": list(new_images or [])}
    if main_image is not None:
        attachments["MainImage"] = main_image
    return ResourcePayload.from_model(request, attachments)


class ProductsClient(ResourceClient[Product]):
    endpoint = "product"
    list_path = "product/search"
    record_model = Product
    filters = frozenset({"keyword"})
    multipart = frozenset({"create", "update"})
    update_id_field = "Id"
    resource_name = "product"

    def create_product(
        self,
        request: ProductRequest,
        *,
        main_image: Attachment | None = None,
        new_images: list[Attachment] | None = None,
    ) -> Result[Product]:
        return self.create(_product_payload(request, main_image, new_images))

    def update_product(
        self,
        product_id: str,
        request: ProductRequest,
        *,
        main_image: Attachment | None = None,
        new_images: list[Attachment] | None = None,
    ) -> Result[Product]:
        return self.update(product_id, _product_payload(request, main_image, new_images))
