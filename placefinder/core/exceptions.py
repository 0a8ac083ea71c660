"""
Custom exceptions for placefinder.

Providers raise these internally; the public search, nearby and review
operations catch them and degrade to an empty or placeholder value.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the library."""
    
    # Configuration errors
    MISSING_API_KEY = "MISSING_API_KEY"
    
    # Upstream errors
    PROVIDER_TIMEOUT = "PROVIDER_TIMEOUT"
    PROVIDER_REQUEST_FAILED = "PROVIDER_REQUEST_FAILED"
    PROVIDER_BAD_STATUS = "PROVIDER_BAD_STATUS"
    PROVIDER_DENIED = "PROVIDER_DENIED"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    
    # Generic errors
    INVALID_QUERY = "INVALID_QUERY"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class PlaceFinderException(Exception):
    """Base exception for placefinder."""
    
    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class MissingApiKeyError(PlaceFinderException):
    """Raised when a provider is used without an API key."""
    
    def __init__(self, provider: str):
        super().__init__(
            message=f"No API key configured for the {provider} provider",
            error_code=ErrorCode.MISSING_API_KEY,
            details={"provider": provider},
        )


class ProviderTimeoutError(PlaceFinderException):
    """Raised when an upstream call times out."""
    
    def __init__(self, endpoint: str):
        super().__init__(
            message=f"Request to '{endpoint}' timed out",
            error_code=ErrorCode.PROVIDER_TIMEOUT,
            details={"endpoint": endpoint},
        )


class ProviderRequestError(PlaceFinderException):
    """Raised when an upstream call fails at the transport level."""
    
    def __init__(self, endpoint: str, reason: str):
        super().__init__(
            message=f"Request to '{endpoint}' failed: {reason}",
            error_code=ErrorCode.PROVIDER_REQUEST_FAILED,
            details={"endpoint": endpoint, "reason": reason},
        )


class ProviderStatusError(PlaceFinderException):
    """Raised when upstream answers with a non-success HTTP status."""
    
    def __init__(self, endpoint: str, status_code: int):
        super().__init__(
            message=f"'{endpoint}' returned HTTP {status_code}",
            error_code=ErrorCode.PROVIDER_BAD_STATUS,
            details={"endpoint": endpoint, "status_code": status_code},
        )
        self.status_code = status_code


class ProviderDeniedError(PlaceFinderException):
    """Raised when the legacy API reports a non-OK status in its body."""
    
    def __init__(self, endpoint: str, api_status: str, error_message: Optional[str] = None):
        details = {"endpoint": endpoint, "api_status": api_status}
        if error_message:
            details["error_message"] = error_message
        super().__init__(
            message=f"'{endpoint}' answered with status {api_status}",
            error_code=ErrorCode.PROVIDER_DENIED,
            details=details,
        )
        self.api_status = api_status


class MalformedResponseError(PlaceFinderException):
    """Raised when an upstream payload cannot be interpreted."""
    
    def __init__(self, endpoint: str, reason: str = "unexpected payload shape"):
        super().__init__(
            message=f"Malformed response from '{endpoint}': {reason}",
            error_code=ErrorCode.MALFORMED_RESPONSE,
            details={"endpoint": endpoint, "reason": reason},
        )
