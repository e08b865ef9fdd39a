"""
HTTP transport for signed requests

This module defines the transport boundary used by the client and the default
implementation on top of ``requests``. The transport sends a fully-prepared
signed request and returns the raw response; it never retries.
"""

import io
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Mapping, Optional, Protocol, runtime_checkable

import requests
from requests.adapters import HTTPAdapter

from .proxy import ProxySettings
from .types import SignedRequest

logger = logging.getLogger(__name__)

# Statuses that never carry a response body
NO_BODY_STATUSES = frozenset({204, 205, 304})


@dataclass
class TransportResponse:
    """
    Raw response returned by a transport

    Attributes:
        status_code: HTTP status code
        status_text: Reason phrase, None when the server sent none
        body: Open body stream, None when the response has no body
        headers: Response headers
    """
    status_code: int
    status_text: Optional[str] = None
    body: Optional[BinaryIO] = None
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def successful(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300


@runtime_checkable
class Transport(Protocol):
    """Sends a signed request and returns the raw response."""

    def send(
        self,
        request: SignedRequest,
        proxy: ProxySettings,
        timeout: Optional[float]
    ) -> TransportResponse:
        """
        Send a request.

        Raises:
            OSError: On connection or I/O failure (requests.RequestException
                is an OSError)
        """
        ...


class ResponseStream(io.RawIOBase):
    """Readable byte stream over a streamed ``requests`` response."""

    def __init__(self, response: requests.Response):
        super().__init__()
        self._response = response

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        data = self._response.raw.read(len(buffer), decode_content=True)
        size = len(data)
        buffer[:size] = data
        return size

    def close(self) -> None:
        if not self.closed:
            self._response.close()
        super().close()


class RequestsTransport:
    """
    Transport backed by a ``requests`` session.

    The session never consults the environment (proxies, .netrc, CA bundle
    variables); proxies are passed explicitly with every send. Redirects
    are not followed since a signature is bound to its URI.
    """

    def __init__(self, session: Optional[requests.Session] = None, verify_ssl: bool = True):
        """
        Initialize the transport.

        Args:
            session: Optional session to use instead of a new one. Its
                trust_env is switched off and retry-free adapters are mounted
                on it, so the transport takes over the session
            verify_ssl: Whether to verify TLS certificates
        """
        self.session = session or requests.Session()
        self.session.trust_env = False
        self.verify_ssl = verify_ssl

        adapter = HTTPAdapter(max_retries=0)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    def send(
        self,
        request: SignedRequest,
        proxy: ProxySettings,
        timeout: Optional[float]
    ) -> TransportResponse:
        """
        Send the signed request.

        Args:
            request: Signed request
            proxy: Proxy settings
            timeout: Socket timeout in seconds, None for no timeout

        Returns:
            TransportResponse: Status, reason phrase and streamed body

        Raises:
            requests.RequestException: On connection or I/O failure
        """
        prepared = requests.Request(
            method=request.method.value,
            url=request.uri,
            headers=request.header_dict(),
            data=request.payload,
        ).prepare()

        logger.debug(f"Sending {prepared.method} request to {prepared.url}")

        response = self.session.send(
            prepared,
            proxies=proxy.as_requests_proxies(),
            timeout=timeout,
            stream=True,
            allow_redirects=False,
            verify=self.verify_ssl,
        )

        return TransportResponse(
            status_code=response.status_code,
            status_text=response.reason or None,
            body=self._body_for(response),
            headers=dict(response.headers),
        )

    def _body_for(self, response: requests.Response) -> Optional[BinaryIO]:
        """Wrap the response body, or release the connection if there is none."""
        if response.raw is None or response.status_code in NO_BODY_STATUSES:
            response.close()
            return None
        return ResponseStream(response)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
        logger.debug("HTTP session closed")
