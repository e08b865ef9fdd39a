"""
Type definitions for SigV4 request signing
"""

from dataclasses import dataclass, field

from ..exceptions import InvalidArgumentError


# SigV4 timestamp format used for X-Amz-Date and the credential scope
SIGV4_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"

SIGV4_ALGORITHM = "AWS4-HMAC-SHA256"


@dataclass(frozen=True)
class AwsCredentials:
    """
    Static AWS credentials used to sign requests

    The secret is excluded from repr so credentials never end up in logs.
    """
    access_key_id: str
    secret_access_key: str = field(repr=False)

    def __post_init__(self):
        if not self.access_key_id:
            raise InvalidArgumentError("Access key ID cannot be empty", details={"field": "access_key_id"})

        if not self.secret_access_key:
            raise InvalidArgumentError("Secret access key cannot be empty", details={"field": "secret_access_key"})


class SigningErrorCodes:
    """Standard error codes for signing operations"""

    SIGNING_FAILED = "SIGNING_FAILED"
