"""
Response envelopes and hypermedia links.

Every response body is wrapped in an envelope with a ``type``
discriminator (``success`` or ``error``) and the HTTP ``statusCode``:

    {"type": "success", "statusCode": 201, "message": "...", "author": {...}}
    {"type": "success", "statusCode": 200, "count": 2, "authors": [...]}
    {"type": "error", "statusCode": 409, "message": "...", "fields": ["name"]}
"""

from typing import Any

from fastapi.responses import JSONResponse

from novels_api.constants import ENVELOPE_SUCCESS
from novels_api.schemas.response import ErrorResponseModel
from novels_api.settings import app_settings
from novels_api.utils.error_classifier import ClassifiedError


def self_uri(collection: str, resource_id: int) -> str:
    """Canonical path of a single resource, e.g. ``/api/authors/1``."""
    return f"{app_settings.API_PREFIX}/{collection}/{resource_id}"


def related_uri(collection: str, resource_id: int, related: str) -> str:
    """Path of a resource's related collection, e.g. ``/api/authors/1/novels``."""
    return f"{self_uri(collection, resource_id)}/{related}"


def resource_links(
    collection: str, resource_id: int, related: str | None = None
) -> dict[str, str]:
    """
    Build the links attached to a serialized resource.

    Args:
        collection: Collection the resource belongs to (``authors``).
        resource_id: Identifier of the resource.
        related: Optional related collection name (``novels``).

    Returns:
        ``{"href": <self uri>}`` plus ``{<related>: <related uri>}`` when
        ``related`` is given.
    """
    links = {"href": self_uri(collection, resource_id)}
    if related:
        links[related] = related_uri(collection, resource_id, related)
    return links


def build_success(
    resource_key: str,
    status_code: int,
    payload: dict[str, Any] | list[dict[str, Any]],
    message: str | None = None,
    count: int | None = None,
) -> dict[str, Any]:
    """
    Build a success envelope.

    Args:
        resource_key: Key holding the payload (``author`` or ``authors``).
        status_code: HTTP status of the response.
        payload: Serialized resource or list of resources.
        message: Optional human-readable message.
        count: Number of records, only for collection responses.

    Returns:
        The response body.
    """
    body: dict[str, Any] = {"type": ENVELOPE_SUCCESS, "statusCode": status_code}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    body[resource_key] = payload
    return body


def build_error(error: ClassifiedError) -> dict[str, Any]:
    """Build an error envelope from a classified error."""
    return ErrorResponseModel(
        status_code=error.status_code,
        message=error.message,
        fields=error.fields,
    ).model_dump(by_alias=True, exclude_none=True)


def respond(
    resource_key: str,
    payload: dict[str, Any],
    status_code: int = 200,
    message: str | None = None,
    location: str | None = None,
) -> JSONResponse:
    """
    Return a single-resource success response.

    ``location`` sets the ``Location`` header, used for 201 responses.
    """
    headers = {"Location": location} if location else None
    return JSONResponse(
        status_code=status_code,
        content=build_success(resource_key, status_code, payload, message),
        headers=headers,
    )


def respond_collection(
    resource_key: str, payload: list[dict[str, Any]]
) -> JSONResponse:
    """Return a 200 collection response with its record count."""
    return JSONResponse(
        status_code=200,
        content=build_success(resource_key, 200, payload, count=len(payload)),
    )


def respond_error(error: ClassifiedError) -> JSONResponse:
    """Return the error envelope for a classified error."""
    return JSONResponse(
        status_code=error.status_code, content=build_error(error)
    )
