from __future__ import annotations

from ..models import Plant
from .resource import ResourceClient


class PlantsClient(ResourceClient[Plant]):
    endpoint = "plant"
    record_model = Plant
    filters = frozenset({"keyword", "status"})
    multipart = frozenset({"create", "update"})
    resource_name = "plant"
