from typing import Any, Dict, Optional


class ClawMarkError(Exception):
    """Base exception for trust-state errors"""

    status_code: int = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        payload.update(self.details)
        return payload


class ValidationError(ClawMarkError):
    """Missing or out-of-range input"""

    status_code = 400


class NotFoundError(ClawMarkError):
    """Unknown key"""

    status_code = 404


class ConflictError(ClawMarkError):
    """Key already exists and may not be overwritten"""

    status_code = 409


class ExpiredError(ClawMarkError):
    """A time-bound record outlived its TTL"""

    status_code = 410


class ExternalServiceError(ClawMarkError):
    """The external platform was unreachable or answered with a non-2xx status"""

    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None, **details: Any):
        super().__init__(message, **details)
        self.upstream_status = upstream_status


class InternalError(ClawMarkError):
    """Unexpected fault"""

    status_code = 500


class ClawMarkConfigurationError(ClawMarkError):
    """Raised when required configuration is missing or invalid."""
