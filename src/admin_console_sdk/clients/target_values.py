from __future__ import annotations

from ..models import TargetValue, TargetValueRequest
from ..result import Result
from .resource import ResourceClient


class TargetValuesClient(ResourceClient[TargetValue]):
    """Sensor target ranges. Created from JSON, updated from form fields."""

    endpoint = "target-value"
    record_model = TargetValue
    filters = frozenset({"type"})
    multipart = frozenset({"update"})
    resource_name = "target value"

    def create_target_value(self, request: TargetValueRequest) -> Result[TargetValue]:
        return self.create(request)

    def update_target_value(self, target_value_id: str, request: TargetValueRequest) -> Result[TargetValue]:
        return self.update(target_value_id, request)
