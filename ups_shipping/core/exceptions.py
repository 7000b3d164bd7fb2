"""
UPS Shipping Exception Hierarchy

Structured exception classes for the XML shipping client.
All exceptions include code, message, and details for logging and debugging.

Exception Hierarchy:
    UPSBaseError
    ├── InvalidArgumentError      (raised before any network call)
    ├── UPSResponseError          (vendor reported a failure status)
    ├── UPSUnknownError           (no parseable response)
    └── UPSTransportError         (network failure in the HTTP transport)
"""
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class UPSBaseError(Exception):
    """
    Base exception for all UPS shipping client errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
        severity: Severity as reported by the vendor, or a local default
    """

    default_code: str = "UPS_ERROR"
    default_severity: str = "Hard"

    def __init__(
        self,
        message: str,
        code: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: Optional[str] = None,
    ):
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.severity = severity or self.default_severity
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "severity": self.severity,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidArgumentError(UPSBaseError, ValueError):
    """A required argument is missing or malformed."""
    default_code = "INVALID_ARGUMENT"

    def __init__(self, message: str, argument: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        details["argument"] = argument
        super().__init__(message, details=details, **kwargs)


class UPSResponseError(UPSBaseError):
    """
    The vendor answered with ResponseStatusCode 0.

    ``code`` holds the vendor's numeric ErrorCode.
    """

    def __init__(
        self,
        error_code: int,
        error_severity: Optional[str],
        error_description: Optional[str],
        **kwargs
    ):
        self.error_code = error_code
        self.error_severity = error_severity or ""
        self.error_description = error_description or ""
        details = kwargs.pop("details", {})
        details.update({
            "error_code": error_code,
            "error_severity": self.error_severity,
            "error_description": self.error_description,
        })
        super().__init__(
            f"Failure ({self.error_severity}): {self.error_description}",
            code=error_code,
            details=details,
            severity=self.error_severity or None,
            **kwargs
        )


class UPSUnknownError(UPSBaseError):
    """The transport returned no parseable response."""

    def __init__(self, message: str = "Failure (0): Unknown error", **kwargs):
        kwargs.setdefault("code", 0)
        super().__init__(message, **kwargs)


class UPSTransportError(UPSBaseError):
    """Network-level failure while talking to the vendor."""
    default_code = "NETWORK_ERROR"

    def __init__(self, message: str, url: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", {})
        details["url"] = url
        super().__init__(message, details=details, **kwargs)
