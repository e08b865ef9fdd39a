"""
AWS Signature Version 4 request signer

This module signs unsigned API Gateway requests with static credentials using
botocore's SigV4 implementation. The signing clock is injectable so signatures
are reproducible for a fixed point in time.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError

from ..exceptions import InvalidArgumentError, SigningError
from ..types import UnsignedRequest, SignedRequest
from .types import AwsCredentials, SigningErrorCodes
from .utils import (
    utc_now,
    format_sigv4_timestamp,
    build_credential_scope,
    diff_headers,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class _ClockedSigV4Auth(SigV4Auth):
    """SigV4Auth that takes its timestamp from a supplied clock."""

    def __init__(self, credentials: Credentials, service_name: str, region_name: str, clock: Clock):
        super().__init__(credentials, service_name, region_name)
        self._clock = clock

    def _set_necessary_date_headers(self, request):
        # Runs before the canonical request is built, so the scope and
        # X-Amz-Date both use the clock time
        request.context["timestamp"] = format_sigv4_timestamp(self._clock())
        super()._set_necessary_date_headers(request)


class SigV4Signer:
    """
    Signs requests for a single service and region.

    Signing is a pure function of (request, credentials, service name,
    region, clock time): no network access and the input request is never
    mutated.
    """

    def __init__(
        self,
        credentials: AwsCredentials,
        service_name: str,
        region: str,
        clock: Optional[Clock] = None
    ):
        """
        Initialize the signer.

        Args:
            credentials: Static AWS credentials
            service_name: Service signing name (e.g. execute-api)
            region: Signing region (e.g. eu-west-1)
            clock: Optional callable returning the signing time (UTC)

        Raises:
            InvalidArgumentError: If credentials, service name or region are missing
        """
        if not isinstance(credentials, AwsCredentials):
            raise InvalidArgumentError(
                "Credentials must be an AwsCredentials instance",
                details={"field": "credentials"}
            )

        if not service_name:
            raise InvalidArgumentError("Service signing name cannot be empty", details={"field": "service_name"})

        if not region:
            raise InvalidArgumentError("Signing region cannot be empty", details={"field": "region"})

        self.service_name = service_name
        self.region = region
        self._clock = clock or utc_now
        self._credentials = Credentials(
            access_key=credentials.access_key_id,
            secret_key=credentials.secret_access_key,
        )

    def sign(self, request: UnsignedRequest) -> SignedRequest:
        """
        Sign a request.

        Args:
            request: Request to sign

        Returns:
            SignedRequest: The original request plus signature headers

        Raises:
            InvalidArgumentError: If request is not an UnsignedRequest
            SigningError: If signing fails
        """
        if not isinstance(request, UnsignedRequest):
            raise InvalidArgumentError(
                "Request must be an UnsignedRequest instance",
                details={"field": "request"}
            )

        aws_request = AWSRequest(
            method=request.method.value,
            url=request.uri,
            headers=dict(request.headers),
            data=request.payload,
        )
        auth = _ClockedSigV4Auth(self._credentials, self.service_name, self.region, self._clock)

        try:
            auth.add_auth(aws_request)
        except (BotoCoreError, ValueError) as e:
            raise SigningError(
                f"Request signing failed: {e}",
                SigningErrorCodes.SIGNING_FAILED,
                {"original_error": str(e)}
            ) from e

        signed_headers = dict(aws_request.headers.items())
        timestamp = aws_request.context["timestamp"]

        logger.debug(f"Signed {request.method.value} request to {request.uri}")

        return SignedRequest(
            request=request,
            headers=signed_headers,
            signature_headers=diff_headers(request.headers, signed_headers),
            timestamp=timestamp,
            credential_scope=build_credential_scope(timestamp, self.region, self.service_name),
        )


def create_signer(
    credentials: AwsCredentials,
    service_name: str,
    region: str,
    clock: Optional[Clock] = None
) -> SigV4Signer:
    """
    Create a new SigV4 signer.

    Args:
        credentials: Static AWS credentials
        service_name: Service signing name
        region: Signing region
        clock: Optional signing clock

    Returns:
        SigV4Signer: Configured signer instance
    """
    return SigV4Signer(credentials, service_name, region, clock)
