"""
Exception classes for API Gateway Python SDK
"""

from typing import Optional, Dict, Any


class ApiGatewaySDKError(Exception):
    """Base exception for all API Gateway SDK errors"""

    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class InvalidArgumentError(ApiGatewaySDKError):
    """Exception raised for missing or invalid configuration and call parameters"""

    def __init__(self, message: str, error_code: str = "INVALID_ARGUMENT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class ConfigurationError(InvalidArgumentError):
    """Exception raised when client configuration cannot be loaded or validated"""

    def __init__(self, message: str, error_code: str = "INVALID_CONFIGURATION", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class SigningError(ApiGatewaySDKError):
    """Exception raised when a request cannot be signed"""

    def __init__(self, message: str, error_code: str = "SIGNING_FAILED", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class TransportError(ApiGatewaySDKError):
    """Exception raised for connection and I/O failures while sending a request"""

    def __init__(self, message: str, error_code: str = "TRANSPORT_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class RemoteRequestError(ApiGatewaySDKError):
    """Exception raised when the endpoint answers with a non-success status"""

    def __init__(self, message: str, http_status: int = 0, status_text: Optional[str] = None,
                 error_code: str = "REMOTE_REQUEST_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
        self.http_status = http_status
        self.status_text = status_text


class EmptyResponseBodyError(ApiGatewaySDKError):
    """Exception raised when a successful response carries no body"""

    def __init__(self, message: str = "Response body is empty!", error_code: str = "EMPTY_RESPONSE_BODY",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)
