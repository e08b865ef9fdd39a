"""
Request construction for the API Gateway client
"""

from typing import Type, TypeVar, Union

from .exceptions import InvalidArgumentError
from .types import HttpMethod, ContentType, UnsignedRequest

E = TypeVar("E", HttpMethod, ContentType)

Payload = Union[bytes, bytearray, memoryview, str]


def _coerce_enum(value, enum_type: Type[E], argument: str) -> E:
    """Accept an enum member, its value, or the (case-insensitive) name of one."""
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        member = enum_type.__members__.get(value.upper())
        if member is not None:
            return member
        for member in enum_type:
            if member.value == value:
                return member

    allowed = ", ".join(enum_type.__members__)
    raise InvalidArgumentError(
        f"{argument} must be one of: {allowed}",
        details={"argument": argument, "value": repr(value)}
    )


def coerce_method(method) -> HttpMethod:
    return _coerce_enum(method, HttpMethod, "method")


def coerce_content_type(content_type) -> ContentType:
    return _coerce_enum(content_type, ContentType, "content_type")


def coerce_payload(payload: Payload) -> bytes:
    """
    Normalize a payload to bytes.

    Bytes-like payloads pass through unchanged; strings are UTF-8 encoded.

    Raises:
        InvalidArgumentError: If payload is None or not bytes-like/str
    """
    if payload is None:
        raise InvalidArgumentError("payload must not be None", details={"argument": "payload"})

    if isinstance(payload, bytes):
        return payload

    if isinstance(payload, (bytearray, memoryview)):
        return bytes(payload)

    if isinstance(payload, str):
        return payload.encode("utf-8")

    raise InvalidArgumentError(
        f"payload must be bytes or str, got {type(payload).__name__}",
        details={"argument": "payload"}
    )


def build_unsigned_request(
    endpoint: str,
    method: Union[HttpMethod, str],
    payload: Payload,
    content_type: Union[ContentType, str]
) -> UnsignedRequest:
    """
    Assemble the unsigned request for one execute call.

    Args:
        endpoint: Target URI configured for the client
        method: HTTP method
        payload: Request body
        content_type: Content type identifier

    Returns:
        UnsignedRequest: Request targeting ``endpoint`` with a Content-Type header

    Raises:
        InvalidArgumentError: If any argument is missing or invalid
    """
    if not endpoint:
        raise InvalidArgumentError("endpoint must not be empty", details={"argument": "endpoint"})

    http_method = coerce_method(method)
    media_type = coerce_content_type(content_type)
    body = coerce_payload(payload)

    return UnsignedRequest(
        method=http_method,
        uri=endpoint,
        headers={"Content-Type": media_type.value},
        payload=body,
    )
