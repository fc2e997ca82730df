from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import IO, Any, ClassVar, Generic, Mapping, TypeVar, Union
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from ..envelope import malformed, parse_model, unwrap_data, unwrap_envelope
from ..exceptions import ApiError, FeatureNotImplementedError, ValidationFailedError
from ..http_client import MultipartParts
from ..models import PaginatedQuery, PaginatedResult, ResourceRecord
from ..result import Result
from .base import BaseClient

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=ResourceRecord)


@dataclass(frozen=True)
class Attachment:
    """Binary content sent as one file part of a multipart request."""

    filename: str
    content: Union[bytes, IO[bytes]]
    content_type: str = "application/octet-stream"


@dataclass
class ResourcePayload:
    fields: dict[str, Any] = field(default_factory=dict)
    attachments: list[tuple[str, Attachment]] = field(default_factory=list)

    @classmethod
    def from_model(cls, model: BaseModel, attachments: Mapping[str, Attachment | list[Attachment]] | None = None) -> ResourcePayload:
        parts: list[tuple[str, Attachment]] = []
        for name, value in (attachments or {}).items():
            for item in value if isinstance(value, list) else [value]:
                parts.append((name, item))
        return cls(fields=model.model_dump(by_alias=True, exclude_none=True, mode="json"), attachments=parts)

    @property
    def has_attachments(self) -> bool:
        return bool(self.attachments)

    def with_field(self, name: str, value: Any) -> ResourcePayload:
        return ResourcePayload(fields={**self.fields, name: value}, attachments=list(self.attachments))

    def multipart_parts(self) -> MultipartParts:
        parts: list[tuple[str, tuple[Any, ...]]] = []
        for name, value in self.fields.items():
            for item in value if isinstance(value, (list, tuple)) else [value]:
                if item is None:
                    continue
                parts.append((name, (None, _form_value(item))))
        for name, attachment in self.attachments:
            parts.append((name, (attachment.filename, attachment.content, attachment.content_type)))
        return parts


PayloadInput = Union[ResourcePayload, BaseModel, Mapping[str, Any]]


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_payload(payload: PayloadInput) -> ResourcePayload:
    if isinstance(payload, ResourcePayload):
        return payload
    if isinstance(payload, BaseModel):
        return ResourcePayload.from_model(payload)
    return ResourcePayload(fields=dict(payload))


def invalid_argument(message: str) -> ValidationFailedError:
    return ValidationFailedError(code="INVALID_ARGUMENT", message=message, status_code=0)


ALL_OPERATIONS = frozenset({"list", "get", "create", "update", "delete"})


class ResourceClient(BaseClient, Generic[RecordT]):
    """Paginated listing and CRUD for one remote resource.

    Subclasses bind the endpoint and record shape through class attributes.
    The client keeps no listing cache; re-issue :meth:`list` after a mutation
    to see its effect. Mutations are sent once and never retried.

    Every public operation returns a :class:`Result`. Bad caller input
    (unsupported filters, paging below 1, blank ids, empty multipart bodies)
    comes back as a ``ValidationFailedError`` with code ``INVALID_ARGUMENT``
    and no request is sent.
    """

    endpoint: ClassVar[str] = ""
    list_path: ClassVar[str | None] = None
    create_path: ClassVar[str | None] = None
    record_model: ClassVar[type[ResourceRecord]] = ResourceRecord
    filters: ClassVar[frozenset[str]] = frozenset({"keyword", "status", "role"})
    operations: ClassVar[frozenset[str]] = ALL_OPERATIONS
    # Actions ("create", "update") whose body is sent as multipart/form-data.
    multipart: ClassVar[frozenset[str]] = frozenset()
    payload_wrapper: ClassVar[str | None] = None
    # When set, update is PUT <endpoint> with the id carried in this body field.
    update_id_field: ClassVar[str | None] = None
    resource_name: ClassVar[str] = "resource"

    def list(self, query: PaginatedQuery | None = None, **filters: Any) -> Result[PaginatedResult[RecordT]]:
        if "list" not in self.operations:
            return self._unsupported("list")
        try:
            query = query or PaginatedQuery()
            if filters:
                query = PaginatedQuery.model_validate({**query.model_dump(), **filters})
        except ValidationError as exc:
            return self._failure("list", invalid_argument(f"Invalid {self.resource_name} query: {exc.error_count()} invalid field(s)"))
        unknown = set(query.active_filters()) - self.filters
        if unknown:
            return self._failure(
                "list",
                invalid_argument(f"{self.resource_name} listing does not accept filters: {', '.join(sorted(unknown))}"),
            )
        fallback = f"Failed to load {self.resource_name} list"
        logger.debug(
            "resource_list",
            extra={"resource": self.resource_name, "page_index": query.page_index, "page_size": query.page_size},
        )
        try:
            data = self._request(
                "GET",
                self.list_path or self.endpoint,
                params=query.to_params(),
                operation=f"{self.resource_name}.list",
                fallback_message=fallback,
            )
            page = parse_model(
                PaginatedResult[self.record_model],  # type: ignore[name-defined]
                self._normalize_page(unwrap_envelope(data, fallback)),
                fallback_message=fallback,
            )
            problems = page.invariant_violations()
            if problems:
                raise malformed(fallback, data, "; ".join(problems))
        except ApiError as exc:
            return self._failure("list", exc)
        return Result.success(page)  # type: ignore[arg-type]

    def get_by_id(self, record_id: str) -> Result[RecordT]:
        if "get" not in self.operations:
            return self._unsupported("get")
        fallback = f"Failed to load {self.resource_name}"
        try:
            data = self._request(
                "GET",
                self._item_path(record_id),
                operation=f"{self.resource_name}.get",
                fallback_message=fallback,
            )
            record = self._parse_record(data, fallback)
        except ApiError as exc:
            return self._failure("get", exc)
        return Result.success(record)

    def create(self, payload: PayloadInput) -> Result[RecordT]:
        if "create" not in self.operations:
            return self._unsupported("create")
        fallback = f"Failed to create {self.resource_name}"
        return self._mutate("POST", self.create_path or self.endpoint, _as_payload(payload), "create", fallback)

    def update(self, record_id: str, payload: PayloadInput) -> Result[RecordT]:
        if "update" not in self.operations:
            return self._unsupported("update")
        fallback = f"Failed to update {self.resource_name}"
        body = _as_payload(payload)
        try:
            if self.update_id_field:
                path = self.endpoint
                body = body.with_field(self.update_id_field, self._checked_id(record_id))
            else:
                path = self._item_path(record_id)
        except ApiError as exc:
            return self._failure("update", exc)
        return self._mutate("PUT", path, body, "update", fallback)

    def delete(self, record_id: str) -> Result[None]:
        if "delete" not in self.operations:
            return self._unsupported("delete")
        fallback = f"Failed to delete {self.resource_name}"
        try:
            data = self._send_delete(record_id, fallback)
            unwrap_envelope(data, fallback)
        except ApiError as exc:
            return self._failure("delete", exc)
        logger.info("resource_deleted", extra={"resource": self.resource_name, "record_id": record_id})
        return Result.success(None)

    def _send_delete(self, record_id: str, fallback: str) -> Any:
        return self._request(
            "DELETE",
            self._item_path(record_id),
            operation=f"{self.resource_name}.delete",
            fallback_message=fallback,
        )

    def _normalize_page(self, content: Any) -> Any:
        """Hook for resources whose list body does not use the standard page keys."""
        return content

    def _mutate(self, method: str, path: str, body: ResourcePayload, action: str, fallback: str) -> Result[RecordT]:
        request_kwargs: dict[str, Any]
        if action in self.multipart or body.has_attachments:
            parts = body.multipart_parts()
            if not parts:
                return self._failure(action, invalid_argument(f"Nothing to send for {self.resource_name} {action}"))
            request_kwargs = {"files": parts}
        else:
            json_body: Any = body.fields
            if self.payload_wrapper:
                json_body = {self.payload_wrapper: json_body}
            request_kwargs = {"json_body": json_body}
        try:
            data = self._request(
                method,
                path,
                operation=f"{self.resource_name}.{action}",
                fallback_message=fallback,
                **request_kwargs,
            )
            record = self._parse_record(data, fallback)
        except ApiError as exc:
            return self._failure(action, exc)
        if action == "create":
            logger.info("resource_created", extra={"resource": self.resource_name, "record_id": record.id})
        else:
            logger.info("resource_updated", extra={"resource": self.resource_name, "record_id": record.id})
        return Result.success(record)

    def _parse_record(self, data: Any, fallback: str) -> RecordT:
        if data is None:
            raise malformed(fallback, data, f"empty {self.resource_name} response")
        content = unwrap_data(unwrap_envelope(data, fallback))
        return parse_model(self.record_model, content, fallback_message=fallback)  # type: ignore[return-value]

    def _checked_id(self, record_id: str) -> str:
        record_id = str(record_id).strip()
        if not record_id:
            raise invalid_argument(f"{self.resource_name} id must not be empty")
        return record_id

    def _item_path(self, record_id: str) -> str:
        return f"{self.endpoint.rstrip('/')}/{quote(self._checked_id(record_id), safe='')}"

    def _unsupported(self, action: str) -> Result[Any]:
        return self._failure(
            action,
            FeatureNotImplementedError(
                code="NOT_IMPLEMENTED",
                message=f"{self.resource_name} {action} not implemented",
                status_code=0,
            ),
        )

    def _failure(self, action: str, exc: ApiError) -> Result[Any]:
        logger.warning(
            "resource_request_failed",
            extra={
                "resource": self.resource_name,
                "action": action,
                "status_code": exc.status_code,
                "code": exc.code,
            },
        )
        return Result.failure(exc)
