"""
Client configuration for the API Gateway SDK

Immutable configuration records for the signed client, with loaders for
plain dictionaries, JSON documents, files and environment variables.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlparse

from ..exceptions import ConfigurationError
from ..signing.types import AwsCredentials


# Recognized option names for the construction-time configuration record
AWS_OPTION_FIELDS = {
    'accessKeyId': 'access_key_id',
    'secretAccessKey': 'secret_access_key',
    'region': 'region',
    'endpoint': 'endpoint',
    'serviceName': 'service_name',
    'socketTimeoutMillis': 'socket_timeout_millis',
}

PROXY_OPTION_FIELDS = {
    'proxyEnabled': 'enabled',
    'proxyHost': 'host',
    'proxyPort': 'port',
    'proxyUsername': 'username',
    'proxyPasswordSecret': 'password',
}

DEFAULT_ENV_PREFIX = "APIGATEWAY_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class AwsProperties:
    """
    Endpoint, signing scope and credentials for the client

    Attributes:
        access_key_id: IAM access key ID
        secret_access_key: IAM secret access key
        region: Signing region
        endpoint: Target URI every request is sent to
        service_name: Service signing name (execute-api for API Gateway)
        socket_timeout_millis: Socket timeout, 0 disables the timeout
    """
    access_key_id: str
    secret_access_key: str = field(repr=False)
    region: str
    endpoint: str
    service_name: str
    socket_timeout_millis: int

    def __post_init__(self):
        """Validate AWS properties."""
        for name in ('access_key_id', 'secret_access_key', 'region', 'endpoint', 'service_name'):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(f"{name} must be a non-empty string", details={"field": name})

        parsed = urlparse(self.endpoint)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid endpoint URL format: {self.endpoint}",
                details={"field": "endpoint"}
            )

        timeout = self.socket_timeout_millis
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
            raise ConfigurationError(
                "socket_timeout_millis must be a non-negative integer",
                details={"field": "socket_timeout_millis"}
            )

    @property
    def credentials(self) -> AwsCredentials:
        return AwsCredentials(self.access_key_id, self.secret_access_key)

    @property
    def socket_timeout(self) -> Optional[float]:
        """Socket timeout in seconds, None when disabled."""
        if self.socket_timeout_millis == 0:
            return None
        return self.socket_timeout_millis / 1000.0


@dataclass(frozen=True)
class ProxyProperties:
    """
    Forward proxy configuration

    Host and port are only required when the proxy is enabled.
    """
    enabled: bool = False
    host: Optional[str] = None
    port: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        """Validate proxy properties."""
        if not isinstance(self.enabled, bool):
            raise ConfigurationError("Proxy enabled flag must be a boolean", details={"field": "enabled"})

        if not self.enabled:
            return

        if not self.host:
            raise ConfigurationError("Proxy host is required when the proxy is enabled", details={"field": "host"})

        if isinstance(self.port, bool) or not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError("Proxy port must be an integer between 1 and 65535", details={"field": "port"})

        if self.password and not self.username:
            raise ConfigurationError("Proxy password given without a username", details={"field": "username"})


@dataclass(frozen=True)
class ClientConfiguration:
    """Complete configuration for an API Gateway client"""
    aws_properties: AwsProperties
    proxy_properties: Optional[ProxyProperties] = None

    def __post_init__(self):
        if not isinstance(self.aws_properties, AwsProperties):
            raise ConfigurationError("AWS properties must not be null.", details={"field": "aws_properties"})

        if self.proxy_properties is not None and not isinstance(self.proxy_properties, ProxyProperties):
            raise ConfigurationError(
                "Proxy properties must be a ProxyProperties instance",
                details={"field": "proxy_properties"}
            )

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> 'ClientConfiguration':
        """
        Build configuration from the recognized option names.

        Args:
            options: Mapping using accessKeyId, secretAccessKey, region,
                endpoint, serviceName, socketTimeoutMillis and optionally
                proxyEnabled, proxyHost, proxyPort, proxyUsername,
                proxyPasswordSecret

        Returns:
            ClientConfiguration: Validated configuration

        Raises:
            ConfigurationError: On missing, unknown or invalid options
        """
        if not isinstance(options, Mapping):
            raise ConfigurationError("Configuration options must be a mapping")

        unknown = sorted(set(options) - set(AWS_OPTION_FIELDS) - set(PROXY_OPTION_FIELDS))
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration options: {', '.join(unknown)}",
                details={"unknown": unknown}
            )

        missing = sorted(name for name in AWS_OPTION_FIELDS if options.get(name) is None)
        if missing:
            raise ConfigurationError(
                f"Missing required configuration options: {', '.join(missing)}",
                details={"missing": missing}
            )

        aws_properties = AwsProperties(**{
            attr: options[name] for name, attr in AWS_OPTION_FIELDS.items()
        })

        proxy_values = {
            attr: options[name] for name, attr in PROXY_OPTION_FIELDS.items() if name in options
        }
        proxy_properties = ProxyProperties(**proxy_values) if proxy_values else None

        return cls(aws_properties, proxy_properties)

    @classmethod
    def from_json(cls, json_string: str) -> 'ClientConfiguration':
        """Load configuration from a JSON document"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> 'ClientConfiguration':
        """Load configuration from a JSON file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string)

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None
    ) -> 'ClientConfiguration':
        """
        Load configuration from environment variables.

        Each option maps to PREFIX + its snake-case upper name, for example
        APIGATEWAY_ACCESS_KEY_ID or APIGATEWAY_PROXY_PASSWORD_SECRET.
        """
        environ = os.environ if environ is None else environ
        options: Dict[str, Any] = {}

        for name in list(AWS_OPTION_FIELDS) + list(PROXY_OPTION_FIELDS):
            value = environ.get(prefix + _env_name(name))
            if value is None:
                continue
            if name in ('socketTimeoutMillis', 'proxyPort'):
                options[name] = _parse_int(name, value)
            elif name == 'proxyEnabled':
                options[name] = _parse_bool(name, value)
            else:
                options[name] = value

        return cls.from_dict(options)


def _env_name(option: str) -> str:
    """accessKeyId -> ACCESS_KEY_ID"""
    return ''.join('_' + c if c.isupper() else c.upper() for c in option)


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}", details={"field": name})


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}", details={"field": name})


def create_client_configuration(
    access_key_id: str,
    secret_access_key: str,
    region: str,
    endpoint: str,
    service_name: str = "execute-api",
    socket_timeout_millis: int = 30000,
    proxy_properties: Optional[ProxyProperties] = None
) -> ClientConfiguration:
    """
    Create client configuration with sensible defaults.

    Args:
        access_key_id: IAM access key ID
        secret_access_key: IAM secret access key
        region: Signing region
        endpoint: Target URI
        service_name: Service signing name
        socket_timeout_millis: Socket timeout in milliseconds
        proxy_properties: Optional proxy configuration

    Returns:
        ClientConfiguration: Validated configuration
    """
    aws_properties = AwsProperties(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=region,
        endpoint=endpoint,
        service_name=service_name,
        socket_timeout_millis=socket_timeout_millis,
    )
    return ClientConfiguration(aws_properties, proxy_properties)
