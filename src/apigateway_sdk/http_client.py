"""
Signed HTTP client for AWS API Gateway endpoints

This module provides the client that builds a request for the configured
endpoint, signs it with SigV4, sends it (optionally through a forward proxy)
and returns the response body stream or a structured error.
"""

import logging
from typing import Any, BinaryIO, Mapping, Optional, Union

import requests

from .config.client_config import AwsProperties, ProxyProperties, ClientConfiguration
from .exceptions import InvalidArgumentError, TransportError
from .proxy import resolve_proxy_settings
from .request_builder import Payload, build_unsigned_request
from .response_handler import ResponseHandler
from .signing.sigv4_signer import SigV4Signer
from .transport import Transport, RequestsTransport
from .types import HttpMethod, ContentType

logger = logging.getLogger(__name__)


class ApiGatewayHttpClient:
    """
    HTTP client for SigV4-protected API Gateway endpoints.

    A client is configured once and can serve any number of sequential
    ``execute`` calls. It holds no mutable state while executing, so
    concurrent use is as safe as the transport it wraps.
    """

    def __init__(
        self,
        aws_properties: AwsProperties,
        proxy_properties: Optional[ProxyProperties] = None,
        transport: Optional[Transport] = None,
        signer: Optional[SigV4Signer] = None,
        response_handler: Optional[ResponseHandler] = None
    ):
        """
        Initialize the client.

        Args:
            aws_properties: Endpoint, signing scope and credentials
            proxy_properties: Optional forward proxy configuration
            transport: Optional transport, defaults to a requests session
            signer: Optional signer, defaults to SigV4 with the configured scope
            response_handler: Optional response handler

        Raises:
            InvalidArgumentError: If aws_properties is missing
        """
        if not isinstance(aws_properties, AwsProperties):
            raise InvalidArgumentError("AWS properties must not be null.")

        if proxy_properties is not None and not isinstance(proxy_properties, ProxyProperties):
            raise InvalidArgumentError("Proxy properties must be a ProxyProperties instance")

        self.aws_properties = aws_properties
        self.proxy_properties = proxy_properties
        self.proxy_settings = resolve_proxy_settings(proxy_properties)
        self.signer = signer or SigV4Signer(
            aws_properties.credentials,
            aws_properties.service_name,
            aws_properties.region,
        )
        self.transport = transport or RequestsTransport()
        self.response_handler = response_handler or ResponseHandler()

        logger.info(
            f"Initialized API Gateway client for endpoint: {aws_properties.endpoint} "
            f"(region={aws_properties.region}, service={aws_properties.service_name}, "
            f"proxy={'on' if self.proxy_settings.enabled else 'off'})"
        )

    @property
    def endpoint(self) -> str:
        return self.aws_properties.endpoint

    def execute(
        self,
        method: Union[HttpMethod, str],
        payload: Payload,
        content_type: Union[ContentType, str]
    ) -> BinaryIO:
        """
        Build, sign and send a request to the configured endpoint.

        Args:
            method: HTTP method (GET, POST or PATCH)
            payload: Request body, may be empty
            content_type: Content type identifier

        Returns:
            BinaryIO: Open response body stream; the caller must close it

        Raises:
            InvalidArgumentError: On invalid arguments, before any network activity
            SigningError: If the request cannot be signed
            TransportError: On connection or I/O failure
            RemoteRequestError: If the endpoint returns a non-success status
            EmptyResponseBodyError: If a successful response has no body
        """
        logger.debug("Building request")
        unsigned_request = build_unsigned_request(self.endpoint, method, payload, content_type)

        logger.debug("Signing request")
        signed_request = self.signer.sign(unsigned_request)

        logger.debug(f"Executing {unsigned_request.method.value} request to {self.endpoint}")
        try:
            response = self.transport.send(
                signed_request,
                self.proxy_settings,
                self.aws_properties.socket_timeout,
            )
        except (requests.RequestException, OSError) as e:
            logger.debug(f"Transport failure: {e}")
            raise TransportError(
                f"Request failed: {e}",
                details={"endpoint": self.endpoint, "original_error": type(e).__name__}
            ) from e

        body = self.response_handler.handle(response)
        logger.debug(f"Request succeeded with status {response.status_code}")
        return body

    def get(self, payload: Payload = b"", content_type: Union[ContentType, str] = ContentType.JSON) -> BinaryIO:
        """Execute a GET request."""
        return self.execute(HttpMethod.GET, payload, content_type)

    def post(self, payload: Payload, content_type: Union[ContentType, str] = ContentType.JSON) -> BinaryIO:
        """Execute a POST request."""
        return self.execute(HttpMethod.POST, payload, content_type)

    def patch(self, payload: Payload, content_type: Union[ContentType, str] = ContentType.JSON) -> BinaryIO:
        """Execute a PATCH request."""
        return self.execute(HttpMethod.PATCH, payload, content_type)

    def close(self):
        """Release the transport, if it can be closed."""
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> 'ApiGatewayHttpClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_client(
    configuration: ClientConfiguration,
    transport: Optional[Transport] = None
) -> ApiGatewayHttpClient:
    """
    Create an API Gateway client from a configuration.

    Args:
        configuration: Client configuration
        transport: Optional transport override

    Returns:
        ApiGatewayHttpClient: Configured client

    Raises:
        InvalidArgumentError: If configuration is missing
    """
    if not isinstance(configuration, ClientConfiguration):
        raise InvalidArgumentError("Client configuration must not be null.")

    return ApiGatewayHttpClient(
        configuration.aws_properties,
        configuration.proxy_properties,
        transport=transport,
    )


def create_client_from_dict(
    options: Mapping[str, Any],
    transport: Optional[Transport] = None
) -> ApiGatewayHttpClient:
    """
    Create an API Gateway client from the recognized configuration options.

    Args:
        options: accessKeyId, secretAccessKey, region, endpoint, serviceName,
            socketTimeoutMillis and optional proxy* options
        transport: Optional transport override

    Returns:
        ApiGatewayHttpClient: Configured client
    """
    return create_client(ClientConfiguration.from_dict(options), transport=transport)
