"""
Type definitions for signed API Gateway requests

This module provides the enumerations and request data classes that flow
through the build -> sign -> send pipeline.
"""

import io
from types import MappingProxyType
from typing import Dict, Mapping, Optional, BinaryIO
from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods supported by the client"""
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"


class ContentType(str, Enum):
    """Content types that can be placed in the Content-Type header"""
    JSON = "application/json"
    TEXT = "text/plain"
    XML = "application/xml"
    FORM = "application/x-www-form-urlencoded"
    OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class UnsignedRequest:
    """
    Request as built for a single execute call, before signing

    Attributes:
        method: HTTP method
        uri: Target URI (the configured endpoint)
        headers: Request headers
        payload: Raw request body bytes
    """
    method: HttpMethod
    uri: str
    headers: Mapping[str, str]
    payload: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def content_stream(self) -> BinaryIO:
        """Return a fresh readable stream over the payload."""
        return io.BytesIO(self.payload)


@dataclass(frozen=True)
class SignedRequest:
    """
    Request augmented with SigV4 signature headers

    Attributes:
        request: The unsigned request this was derived from
        headers: Original headers plus the signature-bearing headers
        signature_headers: Only the headers added by the signer
        timestamp: SigV4 timestamp (YYYYMMDD'T'HHMMSS'Z') used for signing
        credential_scope: date/region/service/aws4_request scope
    """
    request: UnsignedRequest
    headers: Mapping[str, str]
    signature_headers: Mapping[str, str] = field(default_factory=dict)
    timestamp: Optional[str] = None
    credential_scope: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        object.__setattr__(self, "signature_headers", MappingProxyType(dict(self.signature_headers)))

    @property
    def method(self) -> HttpMethod:
        return self.request.method

    @property
    def uri(self) -> str:
        return self.request.uri

    @property
    def payload(self) -> bytes:
        return self.request.payload

    def content_stream(self) -> BinaryIO:
        """Return a fresh readable stream over the original payload."""
        return self.request.content_stream()

    def header_dict(self) -> Dict[str, str]:
        """Return a mutable copy of the signed headers for the transport."""
        return dict(self.headers)
