"""
API Gateway Python SDK
SigV4-signed HTTP client for AWS API Gateway endpoints
"""

from .version import __version__
from .types import (
    HttpMethod,
    ContentType,
    UnsignedRequest,
    SignedRequest,
)
from .exceptions import (
    ApiGatewaySDKError,
    InvalidArgumentError,
    ConfigurationError,
    SigningError,
    TransportError,
    RemoteRequestError,
    EmptyResponseBodyError,
)
from .config import (
    AwsProperties,
    ProxyProperties,
    ClientConfiguration,
    create_client_configuration,
)
from .signing import (
    AwsCredentials,
    SigV4Signer,
    create_signer,
)
from .request_builder import build_unsigned_request
from .proxy import (
    ProxySettings,
    resolve_proxy_settings,
)
from .transport import (
    Transport,
    TransportResponse,
    RequestsTransport,
)
from .response_handler import (
    ResponseHandler,
    build_error_detail,
)
from .http_client import (
    ApiGatewayHttpClient,
    create_client,
    create_client_from_dict,
)

# Public API exports
__all__ = [
    '__version__',
    # Types
    'HttpMethod',
    'ContentType',
    'UnsignedRequest',
    'SignedRequest',
    # Exceptions
    'ApiGatewaySDKError',
    'InvalidArgumentError',
    'ConfigurationError',
    'SigningError',
    'TransportError',
    'RemoteRequestError',
    'EmptyResponseBodyError',
    # Configuration
    'AwsProperties',
    'ProxyProperties',
    'ClientConfiguration',
    'create_client_configuration',
    # Signing
    'AwsCredentials',
    'SigV4Signer',
    'create_signer',
    # Pipeline
    'build_unsigned_request',
    'ProxySettings',
    'resolve_proxy_settings',
    'Transport',
    'TransportResponse',
    'RequestsTransport',
    'ResponseHandler',
    'build_error_detail',
    # Client
    'ApiGatewayHttpClient',
    'create_client',
    'create_client_from_dict',
]
