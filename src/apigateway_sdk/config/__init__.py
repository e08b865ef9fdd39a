"""
Configuration management for API Gateway Python SDK
"""

from .client_config import (
    AwsProperties,
    ProxyProperties,
    ClientConfiguration,
    AWS_OPTION_FIELDS,
    PROXY_OPTION_FIELDS,
    DEFAULT_ENV_PREFIX,
    create_client_configuration,
)

__all__ = [
    'AwsProperties',
    'ProxyProperties',
    'ClientConfiguration',
    'AWS_OPTION_FIELDS',
    'PROXY_OPTION_FIELDS',
    'DEFAULT_ENV_PREFIX',
    'create_client_configuration',
]
