"""
API Gateway Python SDK - Request Signing Module

AWS Signature Version 4 signing of outbound API Gateway requests.
"""

from .types import (
    AwsCredentials,
    SigningErrorCodes,
    SIGV4_ALGORITHM,
    SIGV4_TIMESTAMP_FORMAT,
)

from .sigv4_signer import (
    SigV4Signer,
    create_signer,
)

from .utils import (
    utc_now,
    format_sigv4_timestamp,
    build_credential_scope,
    parse_authorization_header,
)

__all__ = [
    'AwsCredentials',
    'SigningErrorCodes',
    'SIGV4_ALGORITHM',
    'SIGV4_TIMESTAMP_FORMAT',
    'SigV4Signer',
    'create_signer',
    'utc_now',
    'format_sigv4_timestamp',
    'build_credential_scope',
    'parse_authorization_header',
]
