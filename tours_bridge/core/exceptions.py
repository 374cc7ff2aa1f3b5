from fastapi import status
from typing import Any, Dict, Optional, Union


class ConfigurationError(Exception):
    """
    Raised when the service cannot be configured to talk to the provider.

    This is a startup failure, not a request error. It must not derive from
    APIException: no request handler may turn it into a response.
    """


class APIException(Exception):
    """
    Base exception for API errors.

    All per-request errors inherit from this class and render to the same
    JSON envelope.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Any = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.context = context or {}
        super().__init__(str(self.detail))

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for consistent response format."""
        return {
            "error": True,
            "status": self.status_code,
            "message": self.detail,
        }


class UpstreamError(APIException):
    """
    Exception raised when a call to the tours provider fails.

    ``status_code`` mirrors the provider's HTTP status when one was received,
    otherwise it is 500 (timeouts, connection failures, unreadable bodies).
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: Any = "Upstream provider error",
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, context=context)
        self.original_exception = original_exception

        # Add original exception info to context if available
        if original_exception is not None:
            self.context["original_error"] = str(original_exception)


class NotFoundError(APIException):
    """Exception raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Union[str, int],
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        if detail is None:
            detail = f"{resource_type} with id '{resource_id}' not found"

        merged_context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id)
        }
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            context=merged_context
        )
