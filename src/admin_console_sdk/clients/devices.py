from __future__ import annotations

from ..models import Device, DeviceRequest
from ..result import Result
from .resource import Attachment, ResourceClient, ResourcePayload


class DevicesClient(ResourceClient[Device]):
    endpoint = "device"
    record_model = Device
    filters = frozenset({"keyword"})
    multipart = frozenset({"create", "update"})
    resource_name = "device"

    def create_device(self, request: DeviceRequest, attachment: Attachment) -> Result[Device]:
        return self.create(ResourcePayload.from_model(request, {"attachment": attachment}))

    def update_device(
        self,
        device_id: str,
        request: DeviceRequest,
        *,
        attachment: Attachment | None = None,
    ) -> Result[Device]:
        # Unset fields are left out so the server keeps their current values.
        return self.update(device_id, ResourcePayload.from_model(request, {"attachment": attachment} if attachment else None))
