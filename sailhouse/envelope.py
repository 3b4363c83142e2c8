"""
Request and response body encoding for the Sailhouse API.

Request bodies only carry the optional fields the caller actually set; an
omitted field is left out of the JSON object rather than sent as ``null``.
Response bodies are validated into pydantic models, ignoring any field the
model does not declare.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from .exceptions import DecodeError, EncodeError, UnexpectedStatusError
from .models import FilterOption, PublishOptions

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def segment(value: str) -> str:
    """Escape a single URL path segment."""
    return quote(value, safe="")


def format_send_at(send_at: datetime) -> str:
    """
    Format a scheduled delivery time as an RFC 3339 timestamp in UTC.

    Naive datetimes are taken to be in UTC; aware datetimes are converted to
    UTC so sub-minute offsets never reach the output.
    """
    if send_at.tzinfo is None:
        send_at = send_at.replace(tzinfo=timezone.utc)
    return send_at.astimezone(timezone.utc).isoformat()


def build_publish_body(data: Any, options: Optional[PublishOptions] = None) -> Dict[str, Any]:
    """
    Build the body of a publish request.

    Args:
        data: Event payload. Pydantic models, dataclasses and datetimes are
            converted to their JSON form.
        options: Optional envelope fields

    Returns:
        ``{"data": ...}`` plus ``metadata``, ``send_at`` and
        ``wait_group_instance_id`` when set

    Raises:
        EncodeError: If the payload has no JSON form
    """
    try:
        body: Dict[str, Any] = {"data": to_jsonable_python(data)}
    except ValueError as e:
        # PydanticSerializationError is a ValueError
        raise EncodeError("publish", f"payload is not JSON serializable: {e}") from e
    if options is None:
        return body

    # Add optional fields
    if options.metadata is not None:
        body["metadata"] = dict(options.metadata)
    if options.send_at is not None:
        body["send_at"] = format_send_at(options.send_at)
    if options.wait_group_instance_id is not None:
        body["wait_group_instance_id"] = options.wait_group_instance_id
    return body


def build_wait_group_body(topic: str, ttl: Optional[str] = None) -> Dict[str, Any]:
    """Body of a create-instance request."""
    body: Dict[str, Any] = {"topic": topic}
    if ttl is not None:
        body["ttl"] = ttl
    return body


def build_push_subscription_body(
    endpoint: str,
    filter: Optional[FilterOption] = None,
) -> Dict[str, Any]:
    """Body of a push-subscription registration request."""
    body: Dict[str, Any] = {"type": "push", "endpoint": endpoint}
    if filter is not None:
        body["filter"] = filter.model_dump()
    return body


def decode(model: Type[ModelT], response: httpx.Response, operation: str) -> ModelT:
    """
    Validate a JSON response body into ``model``.

    Raises:
        DecodeError: If the body is not JSON or does not match the model
    """
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
        logger.debug(f"Failed to decode {operation} response: {e}")
        raise DecodeError(operation, f"invalid {model.__name__} body: {e}") from e


def ensure_status(response: httpx.Response, operation: str, expected: int) -> None:
    """Raise UnexpectedStatusError unless the response has exactly ``expected`` status."""
    if response.status_code != expected:
        raise UnexpectedStatusError(operation, response.status_code, str(expected), response.text)


def ensure_success(response: httpx.Response, operation: str) -> None:
    """Raise UnexpectedStatusError unless the response has a 2xx status."""
    if not 200 <= response.status_code < 300:
        raise UnexpectedStatusError(operation, response.status_code, "2xx", response.text)
