"""
Response classification for the API Gateway client
"""

import logging
from typing import BinaryIO, Callable, Optional

from .exceptions import RemoteRequestError, EmptyResponseBodyError
from .transport import TransportResponse

logger = logging.getLogger(__name__)

FailureObserver = Callable[[str], None]


def log_request_failure(detail: str) -> None:
    """Default failure observer: warning-level log entry."""
    logger.warning("Request failed! Reason: %s", detail)


def build_error_detail(status_code: int, status_text: Optional[str] = None) -> str:
    """
    Describe a failed response.

    Returns:
        str: "Status code: <code>" followed by ", Status text: <text>"
        when a reason phrase is present
    """
    detail = f"Status code: {status_code}"
    if status_text:
        detail += f", Status text: {status_text}"
    return detail


class ResponseHandler:
    """
    Turns a transport response into a body stream or a typed error.

    Failures are reported to ``on_failure`` before the error is raised.
    """

    def __init__(self, on_failure: Optional[FailureObserver] = None):
        self.on_failure = on_failure or log_request_failure

    def handle(self, response: TransportResponse) -> BinaryIO:
        """
        Classify a response.

        Args:
            response: Raw transport response

        Returns:
            BinaryIO: Open response body; the caller must close it

        Raises:
            RemoteRequestError: If the status is not successful
            EmptyResponseBodyError: If a successful response has no body
        """
        if not response.successful:
            if response.body is not None:
                response.body.close()

            detail = build_error_detail(response.status_code, response.status_text)
            self.on_failure(detail)
            raise RemoteRequestError(
                detail,
                http_status=response.status_code,
                status_text=response.status_text,
                details={"status_code": response.status_code}
            )

        if response.body is None:
            raise EmptyResponseBodyError()

        return response.body
